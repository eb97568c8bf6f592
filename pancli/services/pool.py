"""Pooled SSH sessions keyed by realm address.

Locking Strategy:
- `_meta_lock`: Protects the _sessions OrderedDict and _host_locks dict structure
- Per-host locks: Serialize probe, connect and insert for one host, so a dead
  session is replaced atomically and at most one session per host is ever
  cached
- Lock acquisition order: Always per-host lock first, then meta-lock if needed
- A host lock dropped by `remove` is abandoned; waiters notice and retry
  with the current lock

Borrowing:
- `lease()` marks the entry busy for the duration of a command
- Busy sessions are never closed by the idle reaper or by LRU eviction.
  An entry detached while busy is closed when its last borrower returns

LRU Eviction:
- Uses OrderedDict with move_to_end() for O(1) LRU tracking
- Eviction happens after a new session is established, in the same
  meta-lock block that inserts it
- The oldest idle session is evicted; if every session is busy the oldest
  is detached and closed once released
"""

import asyncio
import contextlib
import functools
import logging
from collections import OrderedDict
from collections.abc import AsyncIterator, Mapping
from datetime import datetime, timedelta
from typing import Any

from pancli.models import Credentials, PooledSession
from pancli.protocols import Connector, Session
from pancli.services.session import open_ssh_session

logger = logging.getLogger(__name__)


def _close_quietly(pooled: PooledSession) -> None:
    """Close a session, ignoring errors from an already dead transport."""
    try:
        pooled.session.close()
    except Exception as e:
        logger.debug("Ignoring error closing session to %s: %s", pooled.host, e)


class ConnectionPool:
    """Session pool with liveness probing, size limits and LRU eviction."""

    def __init__(
        self,
        idle_timeout: int = 300,
        max_size: int = 100,
        port: int = 22,
        connect_timeout: float = 30.0,
        keepalive_interval: float = 15.0,
        known_hosts: str | None = None,
        connector: Connector | None = None,
    ) -> None:
        """Initialize pool.

        Args:
            idle_timeout: Seconds before unused sessions are closed (0 disables)
            max_size: Maximum number of cached sessions (must be > 0)
            port: SSH port of the realm
            connect_timeout: Bound on session establishment, in seconds
            keepalive_interval: Seconds between SSH keepalive requests
            known_hosts: Path to known_hosts file, or None to disable verification
            connector: Coroutine opening a session; defaults to SSH

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be > 0, got {max_size}")

        self.idle_timeout = idle_timeout
        self.max_size = max_size
        self._sessions: OrderedDict[str, PooledSession] = OrderedDict()
        self._host_locks: dict[str, asyncio.Lock] = {}
        self._meta_lock = asyncio.Lock()  # Protects _sessions and _host_locks
        self._cleanup_task: asyncio.Task[Any] | None = None

        if connector is None:
            if known_hosts is None:
                logger.warning(
                    "SSH host key verification DISABLED. "
                    "Set PANCLI_KNOWN_HOSTS to a valid known_hosts file path."
                )
            connector = functools.partial(
                open_ssh_session,
                port=port,
                connect_timeout=connect_timeout,
                keepalive_interval=keepalive_interval,
                known_hosts=known_hosts,
            )
        self._connector = connector

        logger.info(
            "ConnectionPool initialized (idle_timeout=%ds, max_size=%d)",
            idle_timeout,
            max_size,
        )

    async def _get_host_lock(self, host: str) -> asyncio.Lock:
        """Get or create lock for a specific host."""
        async with self._meta_lock:
            if host not in self._host_locks:
                self._host_locks[host] = asyncio.Lock()
            return self._host_locks[host]

    @contextlib.asynccontextmanager
    async def _host_guard(self, host: str) -> AsyncIterator[None]:
        """Hold the current lock for ``host``."""
        while True:
            host_lock = await self._get_host_lock(host)
            await host_lock.acquire()
            if self._host_locks.get(host) is host_lock:
                break
            # Lock was dropped by remove() while we waited
            host_lock.release()

        try:
            yield
        finally:
            host_lock.release()

    def _is_pooled(self, pooled: PooledSession) -> bool:
        return self._sessions.get(pooled.host) is pooled

    def _retire(self, pooled: PooledSession) -> None:
        """Close a detached entry now, or when its last borrower returns."""
        if pooled.is_busy:
            logger.debug(
                "Deferring close of busy session to %s (in_use=%d)",
                pooled.host,
                pooled.in_use,
            )
            return
        _close_quietly(pooled)

    def _pop_lru_locked(self) -> list[PooledSession]:
        """Detach entries until a new one fits. Caller holds the meta-lock."""
        evicted: list[PooledSession] = []
        while len(self._sessions) >= self.max_size:
            victim = next(
                (host for host, pooled in self._sessions.items() if not pooled.is_busy),
                next(iter(self._sessions)),
            )
            logger.info(
                "Pool at capacity (%d/%d), evicting LRU: %s",
                len(self._sessions),
                self.max_size,
                victim,
            )
            evicted.append(self._sessions.pop(victim))
        return evicted

    async def _checkout(
        self, host: str, secrets: Mapping[str, str], borrow: bool
    ) -> PooledSession:
        async with self._host_guard(host):
            pooled = self._sessions.get(host)

            if pooled is not None:
                alive = await pooled.session.probe()
                async with self._meta_lock:
                    # Eviction may have detached it during the probe
                    still_pooled = self._is_pooled(pooled)
                    if alive and still_pooled:
                        pooled.touch()
                        self._sessions.move_to_end(host)
                        if borrow:
                            pooled.in_use += 1
                        logger.debug(
                            "Reusing existing session to %s (pool_size=%d)",
                            host,
                            len(self._sessions),
                        )
                        return pooled
                    if still_pooled:
                        self._sessions.pop(host)

                if still_pooled:
                    logger.info("Session to %s failed liveness probe, reconnecting", host)
                    self._retire(pooled)

            credentials = Credentials.from_secrets(secrets)

            # Network I/O happens here - only blocks same host, not all hosts
            session = await self._connector(host, credentials)

            pooled = PooledSession(host=host, session=session)
            if borrow:
                pooled.in_use = 1
            async with self._meta_lock:
                evicted = self._pop_lru_locked()
                self._sessions[host] = pooled
                self._sessions.move_to_end(host)
                pool_size = len(self._sessions)

            for old in evicted:
                self._retire(old)

            logger.info(
                "Session established to %s (pool_size=%d/%d)",
                host,
                pool_size,
                self.max_size,
            )

            self._ensure_cleanup_task()
            return pooled

    async def acquire(self, host: str, secrets: Mapping[str, str]) -> Session:
        """Return a live session for ``host``, opening one if needed.

        A cached session is probed first and reused without
        re-authenticating. A session failing its probe is evicted and closed
        before a replacement is opened. The session is not marked busy; use
        ``lease`` to keep it open for the duration of a command.

        Args:
            host: Realm address used as the pool key
            secrets: Credential bundle; validated only when connecting

        Returns:
            Live session

        Raises:
            InvalidArgumentError: If the credential bundle is unusable
            Exception: Transport and authentication errors, unmodified
        """
        pooled = await self._checkout(host, secrets, borrow=False)
        return pooled.session

    @contextlib.asynccontextmanager
    async def lease(self, host: str, secrets: Mapping[str, str]) -> AsyncIterator[Session]:
        """Borrow a live session for ``host`` while the block runs.

        The session stays open until the block exits, even if the idle
        reaper or LRU eviction detaches it meanwhile. Its idle clock
        restarts on return.

        Example:
            >>> async with pool.lease(host, secrets) as session:
            ...     result = await session.run("pasxml volumes")
        """
        pooled = await self._checkout(host, secrets, borrow=True)
        try:
            yield pooled.session
        finally:
            pooled.in_use -= 1
            pooled.touch()
            if not pooled.is_busy and not self._is_pooled(pooled):
                logger.debug("Closing detached session to %s after last use", host)
                _close_quietly(pooled)

    def _ensure_cleanup_task(self) -> None:
        if self.idle_timeout <= 0:
            return
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            logger.debug("Started session cleanup task")

    async def _cleanup_loop(self) -> None:
        """Periodically close idle sessions."""
        interval = max(self.idle_timeout // 2, 1)
        while True:
            await asyncio.sleep(interval)
            await self._cleanup_idle()

            if not self._sessions:
                logger.debug("Cleanup loop stopped - no sessions remaining")
                break

    async def _cleanup_idle(self) -> None:
        """Close sessions that have been idle too long. Busy ones are kept."""
        async with self._meta_lock:
            hosts_to_check = list(self._sessions.keys())

        cutoff = datetime.now() - timedelta(seconds=self.idle_timeout)

        for host in hosts_to_check:
            if host not in self._sessions:
                continue
            async with self._host_guard(host):
                pooled = self._sessions.get(host)
                if pooled is None or pooled.is_busy or pooled.last_used >= cutoff:
                    continue
                logger.info(
                    "Closing idle session to %s (pool_size=%d)",
                    host,
                    len(self._sessions) - 1,
                )
                async with self._meta_lock:
                    del self._sessions[host]
                _close_quietly(pooled)

    async def remove(self, host: str) -> None:
        """Forget the session for ``host`` and close it once no longer in use."""
        async with self._host_guard(host):
            async with self._meta_lock:
                pooled = self._sessions.pop(host, None)
                self._host_locks.pop(host, None)
            if pooled is None:
                logger.debug("No session to remove for %s (not in pool)", host)
                return
            logger.info("Removing session to %s (pool_size=%d)", host, len(self._sessions))
            self._retire(pooled)

    async def close_all(self) -> None:
        """Close all sessions, busy or not, and stop the cleanup task."""
        async with self._meta_lock:
            entries = list(self._sessions.values())
            self._sessions.clear()
            self._host_locks.clear()

        if entries:
            logger.info("Closing all %d session(s)", len(entries))
            for pooled in entries:
                _close_quietly(pooled)

        task, self._cleanup_task = self._cleanup_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            logger.debug("Cleanup task cancelled")

    @property
    def pool_size(self) -> int:
        """Return the current number of cached sessions."""
        return len(self._sessions)

    @property
    def active_hosts(self) -> list[str]:
        """Return hosts with cached sessions."""
        return list(self._sessions.keys())
