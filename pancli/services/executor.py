"""Run appliance commands over pooled sessions."""

import logging
from collections.abc import Mapping

from pancli.models.credentials import realm_of
from pancli.services.classifier import ErrorClassifier
from pancli.services.pool import ConnectionPool

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Runs one command per call and classifies its output.

    The executor borrows a session from the pool for the duration of a
    call and never keeps it. Transport failures (connect, auth, channel,
    timeout) propagate unmodified; only output actually returned by the
    appliance goes through the classifier.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        classifier: ErrorClassifier | None = None,
        command_timeout: float | None = None,
    ) -> None:
        """Initialize executor.

        Args:
            pool: Pool providing sessions
            classifier: Output classifier (default rule set if None)
            command_timeout: Optional limit in seconds per command
        """
        self.pool = pool
        self.classifier = classifier or ErrorClassifier()
        self.command_timeout = command_timeout

    async def run(self, secrets: Mapping[str, str], *args: str) -> bytes:
        """Run a command on the realm named in ``secrets``.

        Args:
            secrets: Credential bundle
            *args: Command tokens, joined with single spaces

        Returns:
            Raw output of a successful command

        Raises:
            PancliError: If the output classifies as an error
            InvalidArgumentError: If the credential bundle is unusable
            Exception: Transport errors, unmodified
        """
        host = realm_of(secrets)
        command = " ".join(args)

        async with self.pool.lease(host, secrets) as session:
            logger.debug("Running on %s: command=%r", host, command)
            result = await session.run(command, timeout=self.command_timeout)

        text = result.text
        if result.returncode and not text.strip():
            text = f"Process exited with status {result.returncode}"

        error = self.classifier.classify(text)
        if error is not None:
            logger.debug("Command failed on %s (%s): %s", host, error.kind.value, error)
            raise error

        return result.output
