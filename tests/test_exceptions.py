"""Unit tests for exceptions module."""

from steadycall.core.exceptions import (
    AttemptTimeoutError,
    ConfigurationError,
    OperationError,
    RetriesExhaustedError,
    SteadyCallError,
)


class TestSteadyCallError:
    """Tests for base exception."""

    def test_basic_error(self) -> None:
        error = SteadyCallError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details == {}

    def test_error_with_details(self) -> None:
        error = SteadyCallError("Policy rejected", details={"max_attempts": 0})

        assert "Policy rejected" in str(error)
        assert "Details:" in str(error)
        assert error.details["max_attempts"] == 0

    def test_is_catchable_as_base_type(self) -> None:
        for error in (
            ConfigurationError("bad"),
            OperationError("failed"),
            AttemptTimeoutError("slow", attempt=1, timeout_ms=10),
            RetriesExhaustedError("gave up", last_error=None, attempts=2),
        ):
            assert isinstance(error, SteadyCallError)


class TestConfigurationError:
    def test_field(self) -> None:
        error = ConfigurationError("per_attempt_ms must be > 0", field="per_attempt_ms")

        assert error.field == "per_attempt_ms"
        assert "per_attempt_ms must be > 0" in str(error)


class TestOperationError:
    def test_keeps_cause(self) -> None:
        cause = ValueError("boom")
        error = OperationError("Operation failed", cause=cause, attempts=1)

        assert error.cause is cause
        assert error.attempts == 1


class TestAttemptTimeoutError:
    def test_str(self) -> None:
        error = AttemptTimeoutError("Operation did not complete in time", attempt=3, timeout_ms=250)

        assert str(error) == "[attempt 3] Operation did not complete in time (timeout: 250ms)"
        assert error.attempt == 3
        assert error.timeout_ms == 250


class TestRetriesExhaustedError:
    def test_str(self) -> None:
        error = RetriesExhaustedError(
            "Retries exhausted", last_error=ConnectionError("reset"), attempts=4
        )

        assert str(error) == "Retries exhausted after 4 attempt(s): ConnectionError('reset')"
        assert error.attempts == 4
        assert isinstance(error.last_error, ConnectionError)
