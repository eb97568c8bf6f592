"""Canonical error kinds surfaced by pancli.

Every failure reported by the appliance is mapped onto one of a closed set
of kinds. The original diagnostic text is kept on the exception as
``detail`` so callers can log or display it.
"""

from enum import Enum

import asyncssh


class ErrorKind(str, Enum):
    """Closed set of canonical error kinds."""

    NOT_IMPLEMENTED = "not_implemented"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    UNAUTHENTICATED = "unauthenticated"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


class PancliError(Exception):
    """Base class for classified pancli failures.

    Attributes:
        kind: Canonical error kind
        detail: Original (or normalized) diagnostic text, if any
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    phrase: str = "internal server error"

    def __init__(self, detail: str | None = None) -> None:
        """Initialize error.

        Args:
            detail: Diagnostic text reported by the appliance
        """
        self.detail = detail
        if detail:
            super().__init__(f"{self.phrase}: {detail}")
        else:
            super().__init__(self.phrase)


class OperationNotImplementedError(PancliError):
    """Operation is not implemented."""

    kind = ErrorKind.NOT_IMPLEMENTED
    phrase = "operation is not implemented"


class AlreadyExistsError(PancliError):
    """Volume already exists."""

    kind = ErrorKind.ALREADY_EXISTS
    phrase = "volume already exists"


class NotFoundError(PancliError):
    """Requested entity was not found."""

    kind = ErrorKind.NOT_FOUND
    phrase = "requested entity was not found"


class InvalidArgumentError(PancliError):
    """An invalid argument was specified."""

    kind = ErrorKind.INVALID_ARGUMENT
    phrase = "an invalid argument was specified"


class UnauthenticatedError(PancliError):
    """Request does not carry valid credentials."""

    kind = ErrorKind.UNAUTHENTICATED
    phrase = (
        "request does not have valid authentication credentials for the operation"
    )


class UnavailableError(PancliError):
    """Connection was refused or terminated."""

    kind = ErrorKind.UNAVAILABLE
    phrase = "connection was refused or terminated"


class InternalError(PancliError):
    """Unrecognized appliance output or internal failure."""

    kind = ErrorKind.INTERNAL
    phrase = "internal server error"


class DecodeError(PancliError):
    """Successful command output could not be decoded."""

    kind = ErrorKind.INTERNAL
    phrase = "cannot parse pancli response"


_ERRORS_BY_KIND: dict[ErrorKind, type[PancliError]] = {
    ErrorKind.NOT_IMPLEMENTED: OperationNotImplementedError,
    ErrorKind.ALREADY_EXISTS: AlreadyExistsError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_ARGUMENT: InvalidArgumentError,
    ErrorKind.UNAUTHENTICATED: UnauthenticatedError,
    ErrorKind.UNAVAILABLE: UnavailableError,
    ErrorKind.INTERNAL: InternalError,
}


def error_for(kind: ErrorKind, detail: str | None = None) -> PancliError:
    """Build the exception for a canonical error kind.

    Args:
        kind: Canonical error kind
        detail: Diagnostic text to attach

    Returns:
        Exception instance (not raised)
    """
    return _ERRORS_BY_KIND[kind](detail)


def kind_of(exc: BaseException) -> ErrorKind:
    """Map any exception raised by pancli to a canonical kind.

    Classified errors keep their own kind. Transport failures, which pancli
    propagates unmodified, are mapped here for callers that need one.
    """
    if isinstance(exc, PancliError):
        return exc.kind
    if isinstance(exc, (asyncssh.PermissionDenied, asyncssh.KeyImportError)):
        return ErrorKind.UNAUTHENTICATED
    if isinstance(
        exc,
        (
            asyncssh.DisconnectError,
            asyncssh.ChannelOpenError,
            TimeoutError,
            OSError,
        ),
    ):
        return ErrorKind.UNAVAILABLE
    return ErrorKind.INTERNAL
