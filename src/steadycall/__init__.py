"""
steadycall - Resilient execution of fallible async operations.

Bounded retries with exponential backoff and full jitter, a hard timeout per
attempt, and a typed outcome instead of an exception.

Usage:
    >>> from steadycall import RetryPolicy, TimeoutPolicy, execute
    >>>
    >>> outcome = await execute(
    ...     fetch_prices,
    ...     RetryPolicy(max_attempts=3, base_delay_ms=100, max_delay_ms=1000, jitter=True),
    ...     TimeoutPolicy(per_attempt_ms=2000),
    ... )
    >>> if outcome.ok:
    ...     print(outcome.value)
"""

from steadycall.core.config import ExecutorConfig
from steadycall.core.exceptions import (
    AttemptTimeoutError,
    ConfigurationError,
    OperationError,
    RetriesExhaustedError,
    SteadyCallError,
)
from steadycall.core.logging import configure_logging, get_logger
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
from steadycall.resilience import (
    ResilientExecutor,
    execute,
    is_transient_error,
    logging_reporter,
    resilient,
)

__version__ = "0.1.0"

__all__ = [
    # Executor
    "ResilientExecutor",
    "execute",
    "resilient",
    # Policies & outcomes
    "RetryPolicy",
    "TimeoutPolicy",
    "Operation",
    "Outcome",
    "Success",
    "Failure",
    "FailureKind",
    # Reporting
    "AttemptEvent",
    "AttemptEventKind",
    "Reporter",
    "logging_reporter",
    "is_transient_error",
    # Configuration & logging
    "ExecutorConfig",
    "configure_logging",
    "get_logger",
    # Exceptions
    "SteadyCallError",
    "ConfigurationError",
    "OperationError",
    "AttemptTimeoutError",
    "RetriesExhaustedError",
]
