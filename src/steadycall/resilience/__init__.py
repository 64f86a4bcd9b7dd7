"""
Resilience layer for steadycall.

Provides the ResilientExecutor plus the Tenacity-backed retry and backoff
building blocks it runs on.
"""

from .backoff import backoff_cap_ms, build_wait, next_delay_ms
from .executor import ResilientExecutor, execute, resilient
from .reporting import logging_reporter
from .retry import build_retrying, is_transient_error

__all__ = [
    "ResilientExecutor",
    "execute",
    "resilient",
    "logging_reporter",
    "build_retrying",
    "is_transient_error",
    "build_wait",
    "backoff_cap_ms",
    "next_delay_ms",
]
