"""
Shared fixtures for the OTP portal test suite.

Provides:
    - `clock`: a settable, timezone-aware clock shared by handlers and store.
    - `repository`: an `InMemoryOtpRepository` driven by that clock.
    - `sender`: an `OtpSender` double whose `send_otp` is an `AsyncMock`.
    - `generator`: an `OtpGenerator` double returning a fixed code.
"""

from datetime import datetime, timezone

import pytest

from otp_portal.common.results.result import success
from otp_portal.domain.auth.ports import OtpGenerator, OtpSender
from otp_portal.infrastructure.database.memory.otp_repository import InMemoryOtpRepository


class Clock:
    """Mutable clock so tests can move time forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FixedGenerator(OtpGenerator):
    def __init__(self, *codes: str):
        self.codes = list(codes) or ["123456"]
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


@pytest.fixture
def clock():
    return Clock(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository(clock):
    return InMemoryOtpRepository(clock=clock)


@pytest.fixture
def generator():
    return FixedGenerator("123456", "654321")


@pytest.fixture
def sender(mocker):
    double = mocker.Mock(spec=OtpSender)
    double.send_otp = mocker.AsyncMock(return_value=success())
    return double
