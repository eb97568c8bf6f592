"""pancli: pooled SSH access to the PanFS administrative CLI."""

from pancli.config import Settings
from pancli.dependencies import Dependencies
from pancli.errors import (
    AlreadyExistsError,
    DecodeError,
    ErrorKind,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    OperationNotImplementedError,
    PancliError,
    UnauthenticatedError,
    UnavailableError,
    error_for,
    kind_of,
)
from pancli.models import Volume, VolumeCreateParams, VolumeList
from pancli.services import (
    CommandExecutor,
    ConnectionPool,
    ErrorClassifier,
    PancliClient,
    classify,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "CommandExecutor",
    "ConnectionPool",
    "DecodeError",
    "Dependencies",
    "ErrorClassifier",
    "ErrorKind",
    "InternalError",
    "InvalidArgumentError",
    "NotFoundError",
    "OperationNotImplementedError",
    "PancliClient",
    "PancliError",
    "Settings",
    "UnauthenticatedError",
    "UnavailableError",
    "Volume",
    "VolumeCreateParams",
    "VolumeList",
    "classify",
    "error_for",
    "kind_of",
]
