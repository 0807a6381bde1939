"""Orchestrator configuration.

Every environment variable the orchestrator reads is declared here as a
pydantic-settings field, grouped by prefix (OTEL_, EXECUTION_, EXECUTOR_).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Observability configuration settings (OpenTelemetry, logging)."""

    model_config = SettingsConfigDict(env_prefix="OTEL_", case_sensitive=False)

    # OpenTelemetry Tracing
    tracing_enabled: bool = Field(
        default=False,
        description="Export spans to the OTLP collector",
    )
    exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint (gRPC)",
    )
    service_name: str = Field(
        default="command-orchestrator",
        description="Service name for traces and metrics",
    )
    trace_sample_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json_format: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )


class ExecutionSettings(BaseSettings):
    """Plan execution settings."""

    model_config = SettingsConfigDict(env_prefix="EXECUTION_", case_sensitive=False)

    default_step_timeout_seconds: float = Field(
        default=300.0,
        gt=0.0,
        description="Deadline for a step without a usable timeout parameter",
    )
    max_parallel_steps: int = Field(
        default=8,
        ge=1,
        description="Maximum number of steps running at once in PARALLEL plans",
    )
    max_tracked_executions: int = Field(
        default=100,
        ge=1,
        description="Finished executions kept for status queries",
    )


class ExecutorSettings(BaseSettings):
    """Default executor settings."""

    model_config = SettingsConfigDict(env_prefix="EXECUTOR_", case_sensitive=False)

    simulated_delay_scale: float = Field(
        default=1.0,
        ge=0.0,
        description="Multiplier applied to simulated executor delays (0 disables)",
    )
    health_check_scheme: str = Field(
        default="http",
        description="URL scheme used for service health checks",
    )
    health_check_host: str = Field(
        default="localhost",
        description="Host the services listen on",
    )
    health_check_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="HTTP timeout for a single health check request",
    )
    health_check_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per health check on transport errors",
    )


class Settings(BaseSettings):
    """Orchestrator settings.

    Groups observability, execution and executor settings. Values come from
    the environment, then from a .env file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )

    # Sub-settings
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    executor: ExecutorSettings = Field(default_factory=ExecutorSettings)


# Process-wide settings, built on first use
_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the cached Settings, building them on first call."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
