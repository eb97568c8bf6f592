"""Dependency container for pancli.

Builds the pool, executor and client from settings and owns their
lifetime. Construct one at service start and close it at shutdown.
"""

from dataclasses import dataclass
from types import TracebackType

from pancli.config import Settings
from pancli.services.client import PancliClient
from pancli.services.executor import CommandExecutor
from pancli.services.pool import ConnectionPool


@dataclass
class Dependencies:
    """Container for pancli dependencies.

    Example:
        async with Dependencies.create() as deps:
            volume = await deps.client.get_volume("v1", secrets)
    """

    settings: Settings
    pool: ConnectionPool
    executor: CommandExecutor
    client: PancliClient

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from environment settings."""
        return cls.from_settings(Settings.from_env())

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dependencies":
        """Create dependencies with custom settings.

        Args:
            settings: Settings instance

        Returns:
            Dependencies with a fresh, empty pool
        """
        pool = ConnectionPool(
            idle_timeout=settings.idle_timeout,
            max_size=settings.max_pool_size,
            port=settings.ssh_port,
            connect_timeout=settings.connect_timeout,
            keepalive_interval=settings.keepalive_interval,
            known_hosts=settings.known_hosts,
        )
        executor = CommandExecutor(pool, command_timeout=settings.command_timeout)
        client = PancliClient(executor, listing_command=settings.listing_command)
        return cls(settings=settings, pool=pool, executor=executor, client=client)

    async def close(self) -> None:
        """Close every pooled session."""
        await self.pool.close_all()

    async def __aenter__(self) -> "Dependencies":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
