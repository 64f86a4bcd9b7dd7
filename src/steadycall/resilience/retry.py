"""
Retry strategies using Tenacity.

Translates a RetryPolicy into an ``AsyncRetrying`` controller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt

from steadycall.core.exceptions import AttemptTimeoutError
from steadycall.core.types import RetryPolicy
from steadycall.resilience.backoff import build_wait

SleepFunc = Callable[[float], Awaitable[None]]

_TRANSIENT_MARKERS = (
    "timeout",
    "timed out",
    "connection refused",
    "connection reset",
    "500",
    "502",
    "503",
    "504",
    "network error",
    "rate limit",
    "temporarily unavailable",
)


def is_transient_error(exception: BaseException) -> bool:
    """
    Check if an exception looks like a transient network/infrastructure error.

    Usable directly as ``RetryPolicy(retry_if=is_transient_error)``.
    """
    if isinstance(exception, (TimeoutError, ConnectionError, AttemptTimeoutError)):
        return True
    msg = str(exception).lower()
    return any(marker in msg for marker in _TRANSIENT_MARKERS)


class AttemptFailed(Exception):
    """Internal signal carrying one failed attempt through the retry controller."""

    def __init__(self, attempt: int, cause: BaseException, timed_out: bool = False) -> None:
        super().__init__(f"Attempt {attempt} failed: {cause!r}")
        self.attempt = attempt
        self.cause = cause
        self.timed_out = timed_out


def _retryable(policy: RetryPolicy) -> Callable[[BaseException], bool]:
    def predicate(exc: BaseException) -> bool:
        if not isinstance(exc, AttemptFailed):
            return False
        # Timeouts always move on to the next attempt
        return exc.timed_out or policy.should_retry(exc.cause)

    return predicate


def build_retrying(
    policy: RetryPolicy,
    sleep: SleepFunc = asyncio.sleep,
    before_sleep: Callable[[RetryCallState], Any] | None = None,
) -> AsyncRetrying:
    """
    Build the retry controller for one execution.

    Only ``AttemptFailed`` is retried; anything else escapes the loop. When
    attempts run out Tenacity raises ``RetryError`` wrapping the last attempt.
    """
    kwargs: dict[str, Any] = {}
    if before_sleep is not None:
        kwargs["before_sleep"] = before_sleep
    return AsyncRetrying(
        sleep=sleep,
        stop=stop_after_attempt(policy.max_attempts),
        wait=build_wait(policy),
        retry=retry_if_exception(_retryable(policy)),
        reraise=False,
        **kwargs,
    )
