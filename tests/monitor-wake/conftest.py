"""Pytest configuration and fixtures for monitor-wake tests."""

import pytest

from monitor_wake.config import MonitorConfig
from monitor_wake.models import OutputMode
from monitor_wake.notifier import WakeNotifier

from fixtures.mock_bus import FakeBusSession
from fixtures.streams import FIXED_TIME, PipeStream


@pytest.fixture
def fake_session() -> FakeBusSession:
    """Bus session with an empty queue."""
    return FakeBusSession()


@pytest.fixture
def output() -> PipeStream:
    """Non-interactive output stream."""
    return PipeStream()


@pytest.fixture
def make_notifier(output: PipeStream):
    """Factory for notifiers writing to the output fixture at FIXED_TIME."""

    def _make(mode: OutputMode = OutputMode.PLAIN) -> WakeNotifier:
        return WakeNotifier(mode, stream=output, clock=lambda: FIXED_TIME)

    return _make


@pytest.fixture
def fast_config() -> MonitorConfig:
    """Config with a short idle interval to keep tests quick."""
    return MonitorConfig(idle_interval=0.01)



@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging() during a test."""
    import logging

    yield
    logger = logging.getLogger("monitor_wake")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
