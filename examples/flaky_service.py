"""
Example: Calling a flaky service

Runs a simulated endpoint that fails twice and is sometimes slow, through a
ResilientExecutor with attempt logging turned on.
"""

import asyncio
import random

from steadycall import (
    ExecutorConfig,
    FailureKind,
    ResilientExecutor,
    RetryPolicy,
    TimeoutPolicy,
    configure_logging,
    is_transient_error,
)

calls = 0


async def fetch_price() -> float:
    global calls
    calls += 1
    if calls <= 2:
        raise ConnectionError("connection reset by peer")
    # Occasionally slower than the per-attempt timeout
    await asyncio.sleep(random.choice([0.05, 0.5]))
    return 64_250.0


async def main():
    config = ExecutorConfig.from_env(report_attempts=True)
    configure_logging(config.log_level)

    executor = ResilientExecutor(config)
    outcome = await executor.execute(
        fetch_price,
        RetryPolicy(max_attempts=5, base_delay_ms=100, max_delay_ms=1000, retry_if=is_transient_error),
        TimeoutPolicy(per_attempt_ms=200),
    )

    if outcome.ok:
        print(f"Price: {outcome.value} (attempts: {outcome.attempts})")
    elif outcome.kind == FailureKind.CONFIGURATION_ERROR:
        print(f"Bad configuration: {outcome.last_error}")
    else:
        print(f"Gave up ({outcome.kind.value}) after {outcome.attempts} attempts: {outcome.last_error}")


if __name__ == "__main__":
    asyncio.run(main())
