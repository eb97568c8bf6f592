"""SSH sessions and per-command channels."""

import asyncio
import logging

import asyncssh

from pancli.errors import InvalidArgumentError
from pancli.models import CommandOutput, Credentials

logger = logging.getLogger(__name__)


class SSHSession:
    """Authenticated asyncssh connection shared by many commands.

    Each ``run`` opens its own channel and closes it before returning, on
    success, error, timeout, or cancellation.
    """

    def __init__(self, connection: asyncssh.SSHClientConnection) -> None:
        self._connection = connection

    @property
    def connection(self) -> asyncssh.SSHClientConnection:
        return self._connection

    async def probe(self) -> bool:
        """Check the session is still open.

        asyncssh sends ``keepalive@openssh.com`` requests on the connection
        and closes it when the peer stops answering, so a closed connection
        is how a dead session shows up here.

        A half-open connection still reports live until asyncssh gives up
        on it, which takes up to ``keepalive_interval`` times its keepalive
        count (3 by default), about 45 seconds with the default interval.
        A command run in that window fails with a transport error.
        """
        return not self._connection.is_closed()

    async def run(self, command: str, timeout: float | None = None) -> CommandOutput:
        """Run one command with stderr merged into stdout.

        Args:
            command: Full command line
            timeout: Optional limit in seconds

        Returns:
            CommandOutput with raw bytes and exit status

        Raises:
            TimeoutError: If the command exceeded ``timeout``
            asyncssh.Error: On channel or connection failures
        """
        async with self._connection.create_process(
            command,
            stderr=asyncssh.STDOUT,
            encoding=None,
        ) as process:
            if timeout is None:
                stdout, _ = await process.communicate()
            else:
                stdout, _ = await asyncio.wait_for(process.communicate(), timeout)
            returncode = process.returncode

        return CommandOutput(output=stdout or b"", returncode=returncode)

    def close(self) -> None:
        self._connection.close()


def load_client_keys(credentials: Credentials) -> list[asyncssh.SSHKey] | None:
    """Import the private key from credentials, if any.

    Returns:
        Single-key list, or None when no key was supplied

    Raises:
        InvalidArgumentError: If the key cannot be parsed or decrypted
    """
    if not credentials.private_key:
        return None

    try:
        key = asyncssh.import_private_key(
            credentials.private_key,
            credentials.private_key_passphrase or None,
        )
    except (asyncssh.KeyImportError, asyncssh.KeyEncryptionError) as e:
        raise InvalidArgumentError(
            f"failed to parse SSH private key: {e}, check passphrase for the key"
        ) from e
    return [key]


async def open_ssh_session(
    host: str,
    credentials: Credentials,
    *,
    port: int = 22,
    connect_timeout: float = 30.0,
    keepalive_interval: float = 15.0,
    known_hosts: str | None = None,
) -> SSHSession:
    """Open an authenticated SSH session to a realm.

    Only the methods present in ``credentials`` are offered: the private
    key, then the password (which also answers keyboard-interactive
    prompts). Default keys and ssh-agent are not consulted.

    Raises:
        InvalidArgumentError: If the private key is unusable
        asyncssh.Error, OSError, TimeoutError: Transport failures, unmodified
    """
    client_keys = load_client_keys(credentials)

    logger.info(
        "Opening SSH connection to %s@%s:%d (connect_timeout=%ss)",
        credentials.user,
        host,
        port,
        connect_timeout,
    )
    connection = await asyncssh.connect(
        host,
        port=port,
        username=credentials.user,
        password=credentials.password or None,
        client_keys=client_keys,
        agent_path=None,
        known_hosts=known_hosts,
        connect_timeout=connect_timeout,
        keepalive_interval=keepalive_interval,
    )
    return SSHSession(connection)
