"""
Configuration management for steadycall.

Handles loading executor defaults from environment variables and validation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any

from steadycall.core.exceptions import ConfigurationError
from steadycall.core.types import RetryPolicy, TimeoutPolicy

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _get_env_var(name: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", field=name) from None


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", field=name) from None


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}", field=name)


@dataclass(frozen=True)
class ExecutorConfig:
    """Default policies and logging settings for a ResilientExecutor."""

    max_attempts: int = 3
    base_delay_ms: float = 100.0
    max_delay_ms: float = 10_000.0
    jitter: bool = True
    timeout_ms: float = 30_000.0
    # Logging
    log_level: str = "INFO"
    report_attempts: bool = False

    def __post_init__(self) -> None:
        self.retry_policy().validate()
        self.timeout_policy().validate()

    @classmethod
    def from_env(cls, **overrides: Any) -> ExecutorConfig:
        """Load configuration from STEADYCALL_* environment variables."""
        values: dict[str, Any] = {}

        raw = _get_env_var("STEADYCALL_MAX_ATTEMPTS")
        if raw is not None:
            values["max_attempts"] = _parse_int("STEADYCALL_MAX_ATTEMPTS", raw)

        raw = _get_env_var("STEADYCALL_BASE_DELAY_MS")
        if raw is not None:
            values["base_delay_ms"] = _parse_float("STEADYCALL_BASE_DELAY_MS", raw)

        raw = _get_env_var("STEADYCALL_MAX_DELAY_MS")
        if raw is not None:
            values["max_delay_ms"] = _parse_float("STEADYCALL_MAX_DELAY_MS", raw)

        raw = _get_env_var("STEADYCALL_JITTER")
        if raw is not None:
            values["jitter"] = _parse_bool("STEADYCALL_JITTER", raw)

        raw = _get_env_var("STEADYCALL_TIMEOUT_MS")
        if raw is not None:
            values["timeout_ms"] = _parse_float("STEADYCALL_TIMEOUT_MS", raw)

        raw = _get_env_var("STEADYCALL_REPORT_ATTEMPTS")
        if raw is not None:
            values["report_attempts"] = _parse_bool("STEADYCALL_REPORT_ATTEMPTS", raw)

        values["log_level"] = _get_env_var("STEADYCALL_LOG_LEVEL", default=cls.log_level)

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        values.update(overrides)

        return cls(**values)

    def with_updates(self, **updates: Any) -> ExecutorConfig:
        """Create a new ExecutorConfig with updated values."""
        return replace(self, **updates)

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            base_delay_ms=self.base_delay_ms,
            max_delay_ms=self.max_delay_ms,
            jitter=self.jitter,
        )

    def timeout_policy(self) -> TimeoutPolicy:
        return TimeoutPolicy(per_attempt_ms=self.timeout_ms)
