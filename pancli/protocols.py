"""Protocol interfaces for dependency inversion.

A ``Session`` is the long-lived authenticated connection owned by the
pool. Each command runs on its own channel opened from the session, so
sessions are shared between in-flight commands while channels never are.

Usage Example:

    class FakeSession:
        def __init__(self) -> None:
            self.alive = True

        async def probe(self) -> bool:
            return self.alive

        async def run(self, command, timeout=None):
            return CommandOutput(output=b"Volume created successfully")

        def close(self) -> None:
            self.alive = False

    async def connector(host, credentials):
        return FakeSession()

    pool = ConnectionPool(connector=connector)
"""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from pancli.models import CommandOutput, Credentials


@runtime_checkable
class Session(Protocol):
    """Authenticated remote session owned by the connection pool."""

    async def probe(self) -> bool:
        """Return True if the session is still usable.

        Must not raise; a failed probe is reported as False.
        """
        ...

    async def run(self, command: str, timeout: float | None = None) -> CommandOutput:
        """Run one command on a fresh channel.

        Args:
            command: Full command line
            timeout: Optional limit in seconds for the command

        Returns:
            Combined stdout/stderr and exit status

        Raises:
            Exception: Transport errors, unmodified
        """
        ...

    def close(self) -> None:
        """Close the session. Safe to call more than once."""
        ...


@runtime_checkable
class Connector(Protocol):
    """Opens a new authenticated session for a host."""

    async def __call__(self, host: str, credentials: Credentials) -> Session: ...


@runtime_checkable
class CommandRunner(Protocol):
    """Runs appliance commands and returns successful output."""

    async def run(self, secrets: Mapping[str, str], *args: str) -> bytes:
        """Run a command built from ``args``.

        Returns:
            Raw output of a successful command

        Raises:
            PancliError: If the appliance reported an error
        """
        ...
