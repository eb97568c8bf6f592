"""Shared fixtures for pancli tests."""

import pytest

from pancli.models import CommandOutput, Credentials


class FakeSession:
    """In-memory session with scripted command output."""

    def __init__(self, outputs: list[bytes | CommandOutput] | None = None) -> None:
        self.alive = True
        self.closed = False
        self.commands: list[str] = []
        self.timeouts: list[float | None] = []
        self.outputs = list(outputs or [])

    async def probe(self) -> bool:
        return self.alive

    async def run(self, command: str, timeout: float | None = None) -> CommandOutput:
        self.commands.append(command)
        self.timeouts.append(timeout)
        output = self.outputs.pop(0) if self.outputs else b""
        if isinstance(output, CommandOutput):
            return output
        return CommandOutput(output=output, returncode=0)

    def close(self) -> None:
        self.closed = True
        self.alive = False


class FakeConnector:
    """Connector handing out FakeSessions and recording handshakes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Credentials]] = []
        self.sessions: list[FakeSession] = []
        self.outputs: list[bytes | CommandOutput] = []

    async def __call__(self, host: str, credentials: Credentials) -> FakeSession:
        self.calls.append((host, credentials))
        session = FakeSession(self.outputs)
        self.sessions.append(session)
        return session


@pytest.fixture
def secrets() -> dict[str, str]:
    """Dummy credential bundle. Not real credentials."""
    return {
        "realm_ip": "testrealm",
        "user": "testuser",
        "password": "testpass",
    }


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def fake_session_factory():
    """Build FakeSessions with scripted output."""
    return FakeSession
