"""Pool entry data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pancli.protocols import Session


@dataclass
class PooledSession:
    """A pooled session with its last-known-live timestamp.

    ``in_use`` counts callers currently running commands on the session.
    The pool never closes a session while it is non-zero.
    """

    host: str
    session: "Session"
    last_used: datetime = field(default_factory=datetime.now)
    in_use: int = 0

    def touch(self) -> None:
        """Update last-used timestamp."""
        self.last_used = datetime.now()

    @property
    def is_busy(self) -> bool:
        return self.in_use > 0
