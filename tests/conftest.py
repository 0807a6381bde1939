"""Shared test fixtures."""

import pytest

from command_orchestrator.domain.services.action_dispatcher import ActionDispatcher
from command_orchestrator.infrastructure import dependencies
from command_orchestrator.infrastructure.config.settings import reset_settings
from command_orchestrator.infrastructure.registry.seed_registry import (
    build_default_registry,
)


@pytest.fixture(autouse=True)
def fast_executors(monkeypatch: pytest.MonkeyPatch):
    """Disable simulated executor delays and drop cached singletons."""
    monkeypatch.setenv("EXECUTOR_SIMULATED_DELAY_SCALE", "0")
    reset_settings()
    dependencies.reset_dependencies()
    yield
    reset_settings()
    dependencies.reset_dependencies()


@pytest.fixture
def registry():
    """Seed context registry."""
    return build_default_registry()


@pytest.fixture
def dispatcher() -> ActionDispatcher:
    """Dispatcher with the default executors and no simulated delays."""
    return dependencies.build_action_dispatcher(delay_scale=0)
