"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """pancli settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # SSH transport
    ssh_port: int = field(default=22)
    connect_timeout: float = field(default=30.0)
    command_timeout: float | None = field(default=None)
    keepalive_interval: float = field(default=15.0)
    known_hosts: str | None = field(default=None)

    # Connection pool
    idle_timeout: int = field(default=300)
    max_pool_size: int = field(default=100)

    # Appliance CLI
    listing_command: str = field(default="pasxml")

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ``PANCLI_*`` environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            ssh_port=cls._get_int("PANCLI_SSH_PORT", 22),
            connect_timeout=cls._get_float("PANCLI_CONNECT_TIMEOUT", 30.0),
            command_timeout=cls._get_optional_float("PANCLI_COMMAND_TIMEOUT"),
            keepalive_interval=cls._get_float("PANCLI_KEEPALIVE_INTERVAL", 15.0),
            known_hosts=cls._get_known_hosts(),
            idle_timeout=cls._get_int("PANCLI_IDLE_TIMEOUT", 300),
            max_pool_size=cls._get_pool_size(),
            listing_command=os.getenv("PANCLI_LISTING_COMMAND", "pasxml").strip()
            or "pasxml",
            log_level=os.getenv("PANCLI_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("PANCLI_LOG_COLORS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get float from environment, falling back to default on bad input."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", key, value, default)
            return default

    @staticmethod
    def _get_optional_float(key: str) -> float | None:
        """Get a positive float, or None when unset, zero, or invalid."""
        value = os.getenv(key, "").strip()
        if not value:
            return None

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, leaving unset", key, value)
            return None
        return parsed if parsed > 0 else None

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_known_hosts() -> str | None:
        """Get known_hosts path; unset or ``none`` disables verification."""
        value = os.getenv("PANCLI_KNOWN_HOSTS", "").strip()
        if not value or value.lower() == "none":
            return None
        return os.path.expanduser(value)

    @classmethod
    def _get_pool_size(cls) -> int:
        value = cls._get_int("PANCLI_MAX_POOL_SIZE", 100)
        if value <= 0:
            logger.warning(
                "PANCLI_MAX_POOL_SIZE must be > 0, got %d. Using default: %d",
                value,
                100,
            )
            return 100
        return value
