"""
Exception hierarchy for steadycall.

All library-specific exceptions inherit from SteadyCallError for easy catching.
The executor itself never raises these for operation failures; they are
carried as ``Failure.last_error`` or raised by ``Outcome.unwrap()``.
"""

from __future__ import annotations

from typing import Any


class SteadyCallError(Exception):
    """
    Base exception for all steadycall errors.

    Example:
        >>> try:
        ...     outcome.unwrap()
        ... except SteadyCallError as e:
        ...     print(f"Call failed: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(SteadyCallError):
    """
    Policy or environment configuration is invalid.

    Raised when:
    - A retry or timeout policy fails validation
    - An environment variable cannot be parsed
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class OperationError(SteadyCallError):
    """
    The operation itself failed.

    The underlying exception is kept on ``cause`` and chained as ``__cause__``
    when raised from ``Outcome.unwrap()``.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        attempts: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.cause = cause
        self.attempts = attempts


class AttemptTimeoutError(SteadyCallError):
    """
    An attempt did not complete within its per-attempt timeout.

    Raised when:
    - The operation was still pending when the attempt deadline passed
    - The operation completed exactly at the deadline (timeouts win ties)
    """

    def __init__(
        self,
        message: str,
        attempt: int,
        timeout_ms: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.attempt = attempt
        self.timeout_ms = timeout_ms

    def __str__(self) -> str:
        return f"[attempt {self.attempt}] {self.message} (timeout: {self.timeout_ms}ms)"


class RetriesExhaustedError(SteadyCallError):
    """
    Every allowed attempt failed.

    Wraps the last underlying cause.
    """

    def __init__(
        self,
        message: str,
        last_error: BaseException | None,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.last_error = last_error
        self.attempts = attempts

    def __str__(self) -> str:
        return f"{self.message} after {self.attempts} attempt(s): {self.last_error!r}"
