"""Unit tests for config module."""

import dataclasses

import pytest

from steadycall.core.config import ExecutorConfig
from steadycall.core.exceptions import ConfigurationError
from steadycall.core.types import RetryPolicy, TimeoutPolicy

ENV_VARS = (
    "STEADYCALL_MAX_ATTEMPTS",
    "STEADYCALL_BASE_DELAY_MS",
    "STEADYCALL_MAX_DELAY_MS",
    "STEADYCALL_JITTER",
    "STEADYCALL_TIMEOUT_MS",
    "STEADYCALL_LOG_LEVEL",
    "STEADYCALL_REPORT_ATTEMPTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestExecutorConfig:
    """Tests for ExecutorConfig."""

    def test_defaults(self) -> None:
        config = ExecutorConfig()

        assert config.max_attempts == 3
        assert config.base_delay_ms == 100.0
        assert config.max_delay_ms == 10_000.0
        assert config.jitter is True
        assert config.timeout_ms == 30_000.0
        assert config.log_level == "INFO"
        assert config.report_attempts is False

    def test_is_immutable(self) -> None:
        config = ExecutorConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_attempts = 5  # type: ignore[misc]

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ExecutorConfig(max_attempts=0)

        with pytest.raises(ConfigurationError):
            ExecutorConfig(timeout_ms=0)

        with pytest.raises(ConfigurationError):
            ExecutorConfig(base_delay_ms=500, max_delay_ms=100)

    def test_policies(self) -> None:
        config = ExecutorConfig(max_attempts=4, base_delay_ms=20, max_delay_ms=80, jitter=False, timeout_ms=900)

        assert config.retry_policy() == RetryPolicy(
            max_attempts=4, base_delay_ms=20, max_delay_ms=80, jitter=False
        )
        assert config.timeout_policy() == TimeoutPolicy(per_attempt_ms=900)

    def test_from_env_defaults(self) -> None:
        assert ExecutorConfig.from_env() == ExecutorConfig()

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("STEADYCALL_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("STEADYCALL_BASE_DELAY_MS", "250")
        monkeypatch.setenv("STEADYCALL_MAX_DELAY_MS", "4000")
        monkeypatch.setenv("STEADYCALL_JITTER", "false")
        monkeypatch.setenv("STEADYCALL_TIMEOUT_MS", "1500.5")
        monkeypatch.setenv("STEADYCALL_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("STEADYCALL_REPORT_ATTEMPTS", "yes")

        config = ExecutorConfig.from_env()

        assert config.max_attempts == 5
        assert config.base_delay_ms == 250.0
        assert config.max_delay_ms == 4000.0
        assert config.jitter is False
        assert config.timeout_ms == 1500.5
        assert config.log_level == "DEBUG"
        assert config.report_attempts is True

    def test_from_env_overrides_win(self, monkeypatch) -> None:
        monkeypatch.setenv("STEADYCALL_MAX_ATTEMPTS", "5")

        config = ExecutorConfig.from_env(max_attempts=2, jitter=False)

        assert config.max_attempts == 2
        assert config.jitter is False

    def test_blank_env_uses_default(self, monkeypatch) -> None:
        monkeypatch.setenv("STEADYCALL_MAX_ATTEMPTS", "  ")

        assert ExecutorConfig.from_env().max_attempts == 3

    @pytest.mark.parametrize(
        "name, value",
        [
            ("STEADYCALL_MAX_ATTEMPTS", "three"),
            ("STEADYCALL_BASE_DELAY_MS", "fast"),
            ("STEADYCALL_JITTER", "maybe"),
            ("STEADYCALL_MAX_ATTEMPTS", "0"),
        ],
    )
    def test_from_env_invalid(self, monkeypatch, name, value) -> None:
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigurationError):
            ExecutorConfig.from_env()

    def test_from_env_unknown_override(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            ExecutorConfig.from_env(retries=4)

    def test_with_updates(self) -> None:
        config = ExecutorConfig()

        updated = config.with_updates(max_attempts=7)

        assert updated.max_attempts == 7
        assert config.max_attempts == 3
        assert updated.timeout_ms == config.timeout_ms
