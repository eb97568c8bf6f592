"""Data models for pancli."""

from pancli.models.command import CommandOutput
from pancli.models.credentials import Credentials
from pancli.models.params import VolumeCreateParams
from pancli.models.session import PooledSession
from pancli.models.volume import Bladeset, Volume, VolumeList

__all__ = [
    "Bladeset",
    "CommandOutput",
    "Credentials",
    "PooledSession",
    "Volume",
    "VolumeCreateParams",
    "VolumeList",
]
