"""
Backoff delays using Tenacity wait strategies.

Exponential backoff capped at ``max_delay_ms``, with optional full jitter.
"""

from __future__ import annotations

from tenacity import RetryCallState, wait_exponential, wait_random_exponential
from tenacity.wait import wait_base

from steadycall.core.types import RetryPolicy


def build_wait(policy: RetryPolicy, unit: float = 1000.0) -> wait_base:
    """
    Build the Tenacity wait strategy for a retry policy.

    Args:
        policy: Retry policy supplying base/max delay and jitter
        unit: Divisor applied to the millisecond values (1000 gives seconds,
            which is what Tenacity sleeps in)

    Returns:
        ``wait_random_exponential`` (full jitter) or ``wait_exponential``.
    """
    strategy = wait_random_exponential if policy.jitter else wait_exponential
    return strategy(
        multiplier=policy.base_delay_ms / unit,
        max=policy.max_delay_ms / unit,
        exp_base=2,
        min=0,
    )


def _state_for(attempt: int) -> RetryCallState:
    state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})  # type: ignore[arg-type]
    state.attempt_number = attempt
    return state


def backoff_cap_ms(policy: RetryPolicy, attempt: int) -> float:
    """Upper bound of the delay after ``attempt`` fails: min(base * 2^(attempt-1), max)."""
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    strategy = wait_exponential(
        multiplier=policy.base_delay_ms, max=policy.max_delay_ms, exp_base=2, min=0
    )
    return float(strategy(_state_for(attempt)))


def next_delay_ms(policy: RetryPolicy, attempt: int) -> float:
    """Delay to wait after ``attempt`` fails, jittered when the policy asks for it."""
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    return float(build_wait(policy, unit=1.0)(_state_for(attempt)))
