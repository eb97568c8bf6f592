"""Colorful console logging for pancli."""

import logging
import re
import sys
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pancli.config import Settings

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

COMPONENT_COLORS = {
    "pancli.services.pool": COLORS["bright_magenta"],
    "pancli.services.session": COLORS["bright_magenta"],
    "pancli.services.executor": COLORS["bright_blue"],
    "pancli.services.client": COLORS["bright_cyan"],
    "pancli.services.classifier": COLORS["yellow"],
    "pancli.config": COLORS["green"],
    "default": COLORS["white"],
}

NOISY_LOGGERS = ("asyncssh",)


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d} {dt.strftime('%m/%d')}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("pancli."):
            name = name[len("pancli.") :]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def _highlight_message(self, message: str) -> str:
        """Highlight hosts, commands and pool sizes in log messages."""
        if not self.use_colors:
            return message

        # user@host:port
        if "@" in message:
            message = re.sub(
                r"(\w+@[\w\.\-]+:\d+)",
                f"{COLORS['bright_magenta']}\\1{COLORS['reset']}",
                message,
            )

        if "pool_size=" in message:
            message = re.sub(
                r"(pool_size=\d+(?:/\d+)?)",
                f"{COLORS['cyan']}\\1{COLORS['reset']}",
                message,
            )

        if "command=" in message:
            message = re.sub(
                r"(command='[^']*')",
                f"{COLORS['bright_blue']}\\1{COLORS['reset']}",
                message,
            )

        return message

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a single colored line."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(settings: "Settings") -> logging.Logger:
    """Attach a console handler to the ``pancli`` logger.

    Colors are disabled when stderr is not a TTY. Calling this more than
    once does not add duplicate handlers.

    Args:
        settings: Settings providing log level and color preference

    Returns:
        The configured ``pancli`` logger
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    pancli_logger = logging.getLogger("pancli")
    pancli_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if not pancli_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        pancli_logger.addHandler(handler)
        pancli_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    return pancli_logger
