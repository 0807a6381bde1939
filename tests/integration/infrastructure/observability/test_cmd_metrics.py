"""Integration tests for Prometheus metrics.

Tests that analysis and execution record the expected series in the default
registry.
"""

import pytest
from prometheus_client import REGISTRY

from command_orchestrator.application.use_cases.analyze_command import (
    AnalyzeCommandUseCase,
)
from command_orchestrator.domain.entities.command import ActionType
from command_orchestrator.infrastructure import dependencies
from command_orchestrator.infrastructure.observability import metrics


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricsRecording:
    """Tests for metric recording functions."""

    def test_record_step_timeout(self):
        """Test the step timeout counter."""
        labels = {"action_type": "RUN_TESTS"}
        before = _sample("cmd_orchestrator_step_timeouts_total", labels)

        metrics.record_step_timeout("RUN_TESTS")

        assert _sample("cmd_orchestrator_step_timeouts_total", labels) == before + 1

    def test_record_step_execution(self):
        """Test step counters and histogram."""
        labels = {"action_type": "RUN_TESTS", "status": "COMPLETED"}
        before = _sample("cmd_orchestrator_step_executions_total", labels)

        metrics.record_step_execution("RUN_TESTS", "COMPLETED", 0.42)

        assert _sample("cmd_orchestrator_step_executions_total", labels) == before + 1

    def test_active_executions_gauge(self):
        """Test the in-flight gauge."""
        metrics.set_active_executions(3)
        assert _sample("cmd_orchestrator_active_executions") == 3.0

        metrics.set_active_executions(0)
        assert _sample("cmd_orchestrator_active_executions") == 0.0


class TestPipelineMetrics:
    """Tests that the use cases record metrics."""

    def test_analysis_recorded(self):
        """Test that analyses are counted by outcome."""
        labels = {"outcome": "success"}
        before = _sample("cmd_orchestrator_command_analyses_total", labels)
        use_case: AnalyzeCommandUseCase = dependencies.get_analyze_command_use_case()

        use_case.analyze_command("run unit tests for user-service")

        assert _sample("cmd_orchestrator_command_analyses_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_plan_execution_recorded(self):
        """Test that executions are counted by strategy and status."""
        context = dependencies.get_analyze_command_use_case().analyze_command(
            "run unit tests for user-service"
        )
        labels = {"strategy": "PARALLEL", "status": "COMPLETED"}
        before = _sample("cmd_orchestrator_plan_executions_total", labels)

        result = await dependencies.get_execution_orchestrator().execute_actions(context)

        assert result.success is True
        assert _sample("cmd_orchestrator_plan_executions_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_unknown_service_health_check_recorded(self):
        """Test that health checks are counted by result."""
        labels = {"result": "unknown_service"}
        before = _sample("cmd_orchestrator_health_checks_total", labels)

        await dependencies.get_execution_orchestrator().execute_action(
            ActionType.HEALTH_CHECK, "unknown-service"
        )

        assert _sample("cmd_orchestrator_health_checks_total", labels) == before + 1
