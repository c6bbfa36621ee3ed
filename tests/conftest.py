from __future__ import annotations

import pytest

from safari_mcp.config import SafariSettings


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> SafariSettings:
    return SafariSettings(
        osascript_command="/usr/bin/osascript",
        application="Safari",
        timeout_seconds=5,
        private_window_timeout_seconds=1.0,
        activation_timeout_seconds=0.5,
        poll_interval_seconds=0.1,
    )


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    from safari_mcp import operations

    fake = FakeClock()
    monkeypatch.setattr(operations, "time", fake)
    return fake
