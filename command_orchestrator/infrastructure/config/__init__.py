"""Infrastructure configuration module.

Centralized configuration management using Pydantic Settings.
"""

from command_orchestrator.infrastructure.config.settings import (
    ExecutionSettings,
    ExecutorSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "ObservabilitySettings",
    "ExecutionSettings",
    "ExecutorSettings",
    "get_settings",
    "reset_settings",
]
