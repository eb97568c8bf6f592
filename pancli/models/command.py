"""Command execution data models."""

from dataclasses import dataclass


@dataclass
class CommandOutput:
    """Combined stdout/stderr of one remote command."""

    output: bytes
    returncode: int | None = 0

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")
