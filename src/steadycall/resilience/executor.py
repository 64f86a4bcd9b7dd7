"""
Resilient operation executor.

Runs a caller-supplied async operation under a per-attempt timeout and a
bounded retry policy, and reports the result as an Outcome instead of raising.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import RetryCallState, RetryError

from steadycall.core.config import ExecutorConfig
from steadycall.core.exceptions import AttemptTimeoutError, ConfigurationError
from steadycall.core.types import (
    AttemptEvent,
    AttemptEventKind,
    Failure,
    FailureKind,
    Operation,
    Outcome,
    Reporter,
    RetryPolicy,
    Success,
    TimeoutPolicy,
)
from steadycall.resilience.reporting import logging_reporter
from steadycall.resilience.retry import AttemptFailed, SleepFunc, build_retrying

T = TypeVar("T")


def _consume_result(task: asyncio.Future[Any]) -> None:
    # Retrieve the exception so an abandoned attempt never warns on garbage collection
    if not task.cancelled():
        task.exception()


def _abandon(task: asyncio.Future[Any]) -> None:
    """Request cancellation of a timed-out attempt without waiting for it."""
    task.cancel()
    task.add_done_callback(_consume_result)


class ResilientExecutor:
    """
    Executes operations with retries, backoff and per-attempt timeouts.

    The executor holds no per-call state, so one instance may serve any
    number of concurrent ``execute`` calls.

    On timeout the in-flight attempt is sent a cancellation request and the
    executor moves on immediately. An operation that suppresses
    ``CancelledError`` keeps running in the background, unobserved.
    """

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        *,
        reporter: Reporter | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        """
        Initialize the executor.

        Args:
            config: Default policies used when ``execute`` is called without them
            reporter: Callable notified of every attempt event
            sleep: Replacement for ``asyncio.sleep`` between attempts (seconds)
        """
        self._config = config or ExecutorConfig()
        if reporter is None and self._config.report_attempts:
            reporter = logging_reporter(level=self._config.log_level)
        self._reporter = reporter
        self._sleep: SleepFunc = sleep or asyncio.sleep

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    async def execute(
        self,
        operation: Operation[T],
        retry_policy: RetryPolicy | None = None,
        timeout_policy: TimeoutPolicy | None = None,
    ) -> Outcome[T]:
        """
        Run ``operation`` until it succeeds or the retry policy gives up.

        Returns:
            ``Success(value, attempts)`` or ``Failure(kind, last_error, attempts)``.
            Invalid policies yield ``FailureKind.CONFIGURATION_ERROR`` with zero
            attempts and the operation is never invoked.
        """
        if retry_policy is None:
            retry_policy = self._config.retry_policy()
        if timeout_policy is None:
            timeout_policy = self._config.timeout_policy()

        try:
            retry_policy.validate()
            timeout_policy.validate()
        except ConfigurationError as e:
            return Failure(kind=FailureKind.CONFIGURATION_ERROR, last_error=e, attempts=0)

        retrying = build_retrying(retry_policy, sleep=self._sleep, before_sleep=self._before_sleep)
        try:
            async for attempt in retrying:
                with attempt:
                    number = attempt.retry_state.attempt_number
                    value = await self._run_attempt(operation, number, timeout_policy)
                    self._report(AttemptEvent(AttemptEventKind.SUCCEEDED, number))
                    return Success(value=value, attempts=number)
        except AttemptFailed as failed:
            # Rejected by retry_if
            return Failure(
                kind=FailureKind.OPERATION_ERROR,
                last_error=failed.cause,
                attempts=failed.attempt,
            )
        except RetryError as e:
            failed = e.last_attempt.exception()
            if not isinstance(failed, AttemptFailed):
                raise
            kind = FailureKind.TIMEOUT_ERROR if failed.timed_out else FailureKind.RETRIES_EXHAUSTED
            return Failure(kind=kind, last_error=failed.cause, attempts=failed.attempt)
        raise RuntimeError("retry loop ended without an outcome")

    async def _run_attempt(
        self, operation: Operation[T], attempt: int, timeout_policy: TimeoutPolicy
    ) -> T:
        """Race one invocation of ``operation`` against the attempt timer."""
        loop = asyncio.get_running_loop()
        timeout = timeout_policy.per_attempt_seconds
        deadline = loop.time() + timeout

        try:
            pending = operation()
        except Exception as exc:
            raise self._failed(attempt, exc) from exc
        if not inspect.isawaitable(pending):
            return pending

        task = asyncio.ensure_future(pending)
        finished_at: list[float] = []
        task.add_done_callback(lambda _: finished_at.append(loop.time()))

        try:
            await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        # Completion at the deadline counts as a timeout
        if not task.done() or not finished_at or finished_at[0] >= deadline:
            _abandon(task)
            error = AttemptTimeoutError(
                "Operation did not complete in time",
                attempt=attempt,
                timeout_ms=timeout_policy.per_attempt_ms,
            )
            self._report(AttemptEvent(AttemptEventKind.TIMED_OUT, attempt, error=error))
            raise AttemptFailed(attempt, error, timed_out=True)

        if task.cancelled():
            raise self._failed(attempt, asyncio.CancelledError())
        exc = task.exception()
        if exc is not None:
            raise self._failed(attempt, exc) from exc
        return task.result()

    def _failed(self, attempt: int, error: BaseException) -> AttemptFailed:
        self._report(AttemptEvent(AttemptEventKind.FAILED, attempt, error=error))
        return AttemptFailed(attempt, error)

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        self._report(
            AttemptEvent(
                AttemptEventKind.RETRY_SCHEDULED,
                retry_state.attempt_number,
                delay_ms=delay * 1000.0,
            )
        )

    def _report(self, event: AttemptEvent) -> None:
        if self._reporter is not None:
            self._reporter(event)


async def execute(
    operation: Operation[T],
    retry_policy: RetryPolicy | None = None,
    timeout_policy: TimeoutPolicy | None = None,
    *,
    reporter: Reporter | None = None,
) -> Outcome[T]:
    """
    Execute ``operation`` with a fresh executor built from ``ExecutorConfig()`` defaults.

    ``STEADYCALL_*`` environment variables are not consulted here; pass
    ``ExecutorConfig.from_env()`` to a ResilientExecutor to honour them.
    """
    return await ResilientExecutor(reporter=reporter).execute(
        operation, retry_policy, timeout_policy
    )


def resilient(
    retry_policy: RetryPolicy | None = None,
    timeout_policy: TimeoutPolicy | None = None,
    *,
    executor: ResilientExecutor | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[Outcome[T]]]]:
    """
    Decorate an async function so each call runs through a ResilientExecutor.

    Example:
        >>> @resilient(RetryPolicy(max_attempts=5), TimeoutPolicy(per_attempt_ms=2000))
        ... async def fetch_quote(symbol: str) -> dict:
        ...     ...
        >>> outcome = await fetch_quote("BTC")
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[Outcome[T]]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Outcome[T]:
            runner = executor or ResilientExecutor()
            return await runner.execute(
                functools.partial(func, *args, **kwargs), retry_policy, timeout_policy
            )

        return wrapper

    return decorator
