"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from command_orchestrator.infrastructure.config.settings import (
    ExecutionSettings,
    Settings,
    get_settings,
    reset_settings,
)


class TestSettings:
    """Test cases for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test default values with no overrides."""
        monkeypatch.delenv("EXECUTOR_SIMULATED_DELAY_SCALE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.execution.default_step_timeout_seconds == 300.0
        assert settings.execution.max_parallel_steps == 8
        assert settings.execution.max_tracked_executions == 100
        assert settings.executor.simulated_delay_scale == 1.0
        assert settings.executor.health_check_retries == 3
        assert settings.observability.service_name == "command-orchestrator"
        assert settings.observability.tracing_enabled is False

    def test_env_prefixes(self, monkeypatch):
        """Test that each settings group reads its own prefix."""
        monkeypatch.setenv("EXECUTION_MAX_PARALLEL_STEPS", "3")
        monkeypatch.setenv("EXECUTOR_HEALTH_CHECK_HOST", "services.internal")
        monkeypatch.setenv("OTEL_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.execution.max_parallel_steps == 3
        assert settings.executor.health_check_host == "services.internal"
        assert settings.observability.log_level == "DEBUG"

    def test_invalid_values_rejected(self, monkeypatch):
        """Test field constraints."""
        monkeypatch.setenv("EXECUTION_MAX_PARALLEL_STEPS", "0")

        with pytest.raises(ValidationError):
            ExecutionSettings()

    def test_get_settings_is_cached(self):
        """Test the singleton and its reset."""
        first = get_settings()

        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first
