"""Utilities for pancli."""

from pancli.utils.console import ColorfulFormatter, configure_logging
from pancli.utils.convert import BYTES_PER_GB, bytes_to_gb, format_gb, gb_to_bytes

__all__ = [
    "BYTES_PER_GB",
    "ColorfulFormatter",
    "bytes_to_gb",
    "configure_logging",
    "format_gb",
    "gb_to_bytes",
]
