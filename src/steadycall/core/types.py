"""
Type definitions for steadycall.

Policies, outcomes, failure kinds and attempt events shared by the
executor and its callers.
"""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, NoReturn, TypeAlias, TypeVar

from steadycall.core.exceptions import (
    AttemptTimeoutError,
    ConfigurationError,
    OperationError,
    RetriesExhaustedError,
)

T = TypeVar("T")

# A zero-argument callable producing the value (usually a coroutine function)
Operation: TypeAlias = Callable[[], Awaitable[T]]

RetryPredicate: TypeAlias = Callable[[BaseException], bool]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class RetryPolicy:
    """
    How many times to attempt an operation and how long to wait in between.

    Delay before attempt ``i + 1`` is ``min(base_delay_ms * 2 ** (i - 1), max_delay_ms)``,
    replaced by a uniform draw from ``[0, delay]`` when ``jitter`` is set.
    """

    max_attempts: int = 3
    base_delay_ms: float = 100.0
    max_delay_ms: float = 10_000.0
    jitter: bool = True
    # None retries every failure
    retry_if: RetryPredicate | None = None

    def validate(self) -> None:
        """Raise ConfigurationError if the policy cannot be executed."""
        if not isinstance(self.max_attempts, int) or isinstance(self.max_attempts, bool):
            raise ConfigurationError(
                f"max_attempts must be an integer, got {self.max_attempts!r}",
                field="max_attempts",
            )
        if self.max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be >= 1, got {self.max_attempts}",
                field="max_attempts",
            )
        if not _is_number(self.base_delay_ms) or not math.isfinite(self.base_delay_ms):
            raise ConfigurationError(
                f"base_delay_ms must be a finite number, got {self.base_delay_ms!r}",
                field="base_delay_ms",
            )
        if self.base_delay_ms < 0:
            raise ConfigurationError(
                f"base_delay_ms must be >= 0, got {self.base_delay_ms}",
                field="base_delay_ms",
            )
        if not _is_number(self.max_delay_ms) or not math.isfinite(self.max_delay_ms):
            raise ConfigurationError(
                f"max_delay_ms must be a finite number, got {self.max_delay_ms!r}",
                field="max_delay_ms",
            )
        if self.max_delay_ms < self.base_delay_ms:
            raise ConfigurationError(
                f"max_delay_ms ({self.max_delay_ms}) must be >= base_delay_ms ({self.base_delay_ms})",
                field="max_delay_ms",
            )
        if self.retry_if is not None and not callable(self.retry_if):
            raise ConfigurationError("retry_if must be callable", field="retry_if")

    def should_retry(self, error: BaseException) -> bool:
        if self.retry_if is None:
            return True
        return bool(self.retry_if(error))


@dataclass(frozen=True)
class TimeoutPolicy:
    """Upper bound on the duration of a single attempt."""

    per_attempt_ms: float = 30_000.0

    def validate(self) -> None:
        """Raise ConfigurationError if the timeout is not a positive finite number."""
        if not _is_number(self.per_attempt_ms) or not math.isfinite(self.per_attempt_ms):
            raise ConfigurationError(
                f"per_attempt_ms must be a finite number, got {self.per_attempt_ms!r}",
                field="per_attempt_ms",
            )
        if self.per_attempt_ms <= 0:
            raise ConfigurationError(
                f"per_attempt_ms must be > 0, got {self.per_attempt_ms}",
                field="per_attempt_ms",
            )

    @property
    def per_attempt_seconds(self) -> float:
        return self.per_attempt_ms / 1000.0


class FailureKind(str, Enum):
    """Why an execution failed."""

    CONFIGURATION_ERROR = "configuration_error"  # Invalid policy, nothing attempted
    OPERATION_ERROR = "operation_error"  # Non-retryable operation failure
    TIMEOUT_ERROR = "timeout_error"  # Final attempt timed out
    RETRIES_EXHAUSTED = "retries_exhausted"  # Every attempt failed


@dataclass(frozen=True)
class Success(Generic[T]):
    """The operation produced a value on attempt ``attempts``."""

    value: T
    attempts: int

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """
    The execution ended without a value.

    ``last_error`` is the underlying cause: the operation's exception, an
    AttemptTimeoutError, or a ConfigurationError for rejected policies.
    """

    kind: FailureKind
    last_error: BaseException | None
    attempts: int

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> Exception:
        """Build the exception matching this failure kind."""
        if self.kind == FailureKind.CONFIGURATION_ERROR:
            if isinstance(self.last_error, ConfigurationError):
                return self.last_error
            return ConfigurationError(str(self.last_error))
        if self.kind == FailureKind.TIMEOUT_ERROR:
            if isinstance(self.last_error, AttemptTimeoutError):
                return self.last_error
            return AttemptTimeoutError("Operation timed out", attempt=self.attempts, timeout_ms=0)
        if self.kind == FailureKind.OPERATION_ERROR:
            return OperationError(
                f"Operation failed: {self.last_error!r}",
                cause=self.last_error,
                attempts=self.attempts,
            )
        return RetriesExhaustedError(
            "Retries exhausted", last_error=self.last_error, attempts=self.attempts
        )

    def unwrap(self) -> NoReturn:
        """Raise the exception for this failure, chained to the underlying cause."""
        exc = self.to_exception()
        if exc is self.last_error:
            raise exc
        raise exc from self.last_error


Outcome: TypeAlias = Success[T] | Failure


class AttemptEventKind(str, Enum):
    """What happened during an attempt."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    RETRY_SCHEDULED = "retry_scheduled"


@dataclass(frozen=True)
class AttemptEvent:
    """Notification passed to an executor reporter."""

    kind: AttemptEventKind
    attempt: int
    error: BaseException | None = None
    # Only set for RETRY_SCHEDULED
    delay_ms: float | None = None


Reporter: TypeAlias = Callable[[AttemptEvent], None]
