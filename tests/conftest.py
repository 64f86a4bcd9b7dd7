import logging

import pytest

from steadycall.core.logging import LOGGER_NAME
from steadycall.core.types import AttemptEvent
from steadycall.resilience.executor import ResilientExecutor


class FlakyOperation:
    """Async operation that fails a fixed number of times before returning a value."""

    def __init__(self, failures: int = 0, value: object = "ok", error: type[Exception] = RuntimeError):
        self.failures = failures
        self.value = value
        self.error = error
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error(f"failure #{self.calls}")
        return self.value


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() so caplog keeps receiving steadycall records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logging.getLogger(f"{LOGGER_NAME}.executor").setLevel(logging.NOTSET)


@pytest.fixture
def delays():
    """Inter-attempt delays (seconds) requested by the executor."""
    return []


@pytest.fixture
def recording_sleep(delays):
    async def sleep(seconds: float) -> None:
        delays.append(seconds)

    return sleep


@pytest.fixture
def events():
    return []


@pytest.fixture
def executor(recording_sleep, events):
    def reporter(event: AttemptEvent) -> None:
        events.append(event)

    return ResilientExecutor(reporter=reporter, sleep=recording_sleep)


@pytest.fixture
def flaky():
    return FlakyOperation
