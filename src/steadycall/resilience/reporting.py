"""Reporters that turn executor attempt events into log records."""

from __future__ import annotations

import logging

from steadycall.core.logging import get_logger
from steadycall.core.types import AttemptEvent, AttemptEventKind, Reporter


def logging_reporter(
    logger: logging.Logger | None = None,
    name: str = "executor",
    level: int | str | None = None,
) -> Reporter:
    """
    Build a reporter that logs each attempt event.

    Failures and timeouts log at WARNING, scheduled retries at INFO and
    successes at DEBUG. When ``level`` is given it becomes the threshold of
    the reporter's logger.
    """
    log = logger or get_logger(name)
    if level is not None:
        log.setLevel(level)

    def report(event: AttemptEvent) -> None:
        extra = {"attempt": event.attempt, "event": event.kind.value}
        if event.kind == AttemptEventKind.SUCCEEDED:
            log.debug(f"Attempt {event.attempt} succeeded", extra=extra)
        elif event.kind == AttemptEventKind.TIMED_OUT:
            log.warning(f"Attempt {event.attempt} timed out: {event.error}", extra=extra)
        elif event.kind == AttemptEventKind.FAILED:
            log.warning(f"Attempt {event.attempt} failed: {event.error!r}", extra=extra)
        else:
            extra["delay_ms"] = event.delay_ms
            log.info(
                f"Retrying in {event.delay_ms:.0f}ms (after attempt {event.attempt})",
                extra=extra,
            )

    return report
