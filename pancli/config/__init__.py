"""Configuration for pancli."""

from pancli.config.settings import Settings

__all__ = ["Settings"]
