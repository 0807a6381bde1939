"""Unit tests for the simulated executors."""

import asyncio

import pytest

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.infrastructure.executors.simulated_chaos_executor import (
    SimulatedChaosExecutor,
)
from command_orchestrator.infrastructure.executors.simulated_failure_analysis_executor import (
    SimulatedFailureAnalysisExecutor,
)
from command_orchestrator.infrastructure.executors.simulated_performance_executor import (
    SimulatedPerformanceExecutor,
)
from command_orchestrator.infrastructure.executors.simulated_security_executor import (
    SimulatedSecurityExecutor,
)
from command_orchestrator.infrastructure.executors.simulated_test_executor import (
    TEST_RUN_PROFILES,
    SimulatedTestExecutor,
)


class TestSimulatedTestExecutor:
    """Test cases for the per-test-type suite executor."""

    @pytest.mark.asyncio
    async def test_unit_run(self):
        """Test the unit test payload."""
        executor = SimulatedTestExecutor(TestType.UNIT_TEST, delay_scale=0)

        result = await executor.execute("user-service", {})

        assert result.success is True
        assert result.message == "Unit tests executed successfully"
        assert result.data["service"] == "user-service"
        assert result.data["testType"] == "UNIT_TEST"
        assert result.data["testsRun"] == 45
        assert result.data["testsPassed"] == 43
        assert result.data["testsFailed"] == 2
        assert result.data["coverage"] == "87.5%"
        assert result.data["duration"] == "2s"
        assert "environment" not in result.data

    @pytest.mark.asyncio
    async def test_environment_is_echoed(self):
        """Test that the target environment is reported."""
        executor = SimulatedTestExecutor(TestType.API_TEST, delay_scale=0)

        result = await executor.execute("order-service", {"environment": "staging"})

        assert result.message == "API tests executed successfully"
        assert result.data["endpointsTested"] == 8
        assert result.data["environment"] == "staging"

    @pytest.mark.parametrize("test_type", list(TEST_RUN_PROFILES))
    @pytest.mark.asyncio
    async def test_every_profile_succeeds(self, test_type):
        """Test that every profiled test type produces a result."""
        executor = SimulatedTestExecutor(test_type, delay_scale=0)

        result = await executor.execute("product-service", {})

        assert result.success is True
        assert result.data["testType"] == test_type.value

    @pytest.mark.parametrize(
        "test_type",
        [
            TestType.PERFORMANCE_TEST,
            TestType.SECURITY_TEST,
            TestType.CHAOS_TEST,
            TestType.PENETRATION_TEST,
        ],
    )
    def test_unprofiled_test_type_rejected(self, test_type):
        """Test that types served by dedicated executors have no profile."""
        with pytest.raises(ValueError, match="No simulated profile"):
            SimulatedTestExecutor(test_type, delay_scale=0)

    def test_delay_scale_defaults_to_settings(self):
        """Test that the delay scale comes from settings when omitted."""
        executor = SimulatedTestExecutor(TestType.SMOKE_TEST)

        assert executor.delay_scale == 0

    @pytest.mark.asyncio
    async def test_simulated_run_is_cancellable(self):
        """Test that cancelling a run interrupts the simulated delay."""
        executor = SimulatedTestExecutor(TestType.END_TO_END_TEST, delay_scale=1.0)
        task = asyncio.create_task(executor.execute("user-service", {}))
        await asyncio.sleep(0)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestSimulatedChaosExecutor:
    """Test cases for the chaos experiment executor."""

    @pytest.mark.asyncio
    async def test_defaults(self):
        """Test the default experiment."""
        executor = SimulatedChaosExecutor(delay_scale=0)

        result = await executor.execute("order-service", {"testType": "CHAOS_TEST"})

        assert result.success is True
        assert result.message == "Chaos test executed successfully"
        assert result.data["chaosType"] == "pod_failure"
        assert result.data["intensity"] == "medium"
        assert result.data["duration"] == "60s"
        assert result.data["experimentStatus"] == "COMPLETED"
        assert "No data loss detected" in result.data["lessonsLearned"]

    @pytest.mark.asyncio
    async def test_custom_experiment(self):
        """Test that experiment parameters are honoured."""
        executor = SimulatedChaosExecutor(delay_scale=0)

        result = await executor.execute(
            "product-service",
            {"chaosType": "network_latency", "intensity": "high", "duration": "30s"},
        )

        assert result.data["chaosType"] == "network_latency"
        assert result.data["intensity"] == "high"
        assert result.data["duration"] == "30s"
        assert result.data["lessonsLearned"] == [
            "Timeouts on downstream calls stayed within budget",
            "Retries absorbed transient latency",
        ]

    @pytest.mark.asyncio
    async def test_unknown_experiment_type(self):
        """Test the generic lessons for unlisted experiment types."""
        executor = SimulatedChaosExecutor(delay_scale=0)

        result = await executor.execute("user-service", {"chaosType": "disk_fill"})

        assert result.data["lessonsLearned"] == [
            "Service recovered without manual intervention"
        ]


class TestSimulatedPerformanceExecutor:
    """Test cases for the performance executor."""

    @pytest.mark.asyncio
    async def test_defaults(self):
        """Test the default load profile and reported metrics."""
        executor = SimulatedPerformanceExecutor(delay_scale=0)

        result = await executor.execute(
            "order-service", {"testType": "PERFORMANCE_TEST"}
        )

        assert result.success is True
        assert result.message == "Performance test executed successfully"
        assert result.data["testType"] == "PERFORMANCE_TEST"
        assert result.data["loadType"] == "load"
        assert result.data["concurrentUsers"] == 100
        assert result.data["duration"] == "5m"
        assert result.data["loadPattern"] == "ramp_up"
        assert result.data["avgResponseTime"] == "245ms"

    @pytest.mark.asyncio
    async def test_custom_load(self):
        """Test that load parameters are honoured."""
        executor = SimulatedPerformanceExecutor(delay_scale=0)

        result = await executor.execute(
            "user-service", {"loadType": "stress", "concurrentUsers": 500}
        )

        assert result.data["loadType"] == "stress"
        assert result.data["concurrentUsers"] == 500


class TestSimulatedSecurityExecutor:
    """Test cases for the security scan executor."""

    @pytest.mark.asyncio
    async def test_defaults(self):
        """Test the default scan report."""
        executor = SimulatedSecurityExecutor(delay_scale=0)

        result = await executor.execute("gateway-service", {})

        assert result.success is True
        assert result.message == "Security test executed successfully"
        assert result.data["scanType"] == "vulnerability_scan"
        assert result.data["scanDepth"] == "comprehensive"
        assert result.data["vulnerabilitiesFound"] == 3
        assert result.data["securityScore"] == "B+"

    @pytest.mark.asyncio
    async def test_custom_scan(self):
        """Test that scan parameters are honoured."""
        executor = SimulatedSecurityExecutor(delay_scale=0)

        result = await executor.execute(
            "user-service", {"scanType": "dependency_audit", "scanDepth": "quick"}
        )

        assert result.data["scanType"] == "dependency_audit"
        assert result.data["scanDepth"] == "quick"


class TestSimulatedFailureAnalysisExecutor:
    """Test cases for the failure analysis executor."""

    @pytest.mark.asyncio
    async def test_analysis(self):
        """Test the failure report."""
        executor = SimulatedFailureAnalysisExecutor(delay_scale=0)

        result = await executor.execute("order-service", {})

        assert result.success is True
        assert result.message == "Failure analysis completed"
        assert result.data["count"] == 2
        assert len(result.data["failures"]) == 2
        assert result.data["failures"][0]["test"].startswith("order-service.")
        assert "testType" not in result.data

    @pytest.mark.asyncio
    async def test_test_type_is_echoed(self):
        """Test that a requested test type is reported."""
        executor = SimulatedFailureAnalysisExecutor(delay_scale=0)

        result = await executor.execute("order-service", {"testType": "UNIT_TEST"})

        assert result.data["testType"] == "UNIT_TEST"


class TestDefaultDispatcherWiring:
    """Test cases for the default executor wiring."""

    @pytest.mark.asyncio
    async def test_run_tests_uses_test_type_executor(self, dispatcher):
        """Test that RUN_TESTS is routed by test type."""
        result = await dispatcher.dispatch(
            ActionType.RUN_TESTS, "user-service", TestType.INTEGRATION_TEST, {}
        )

        assert result.success is True
        assert result.message == "Integration tests executed successfully"

    @pytest.mark.asyncio
    async def test_performance_routed_to_performance_executor(self, dispatcher):
        """Test that performance test types reach the performance executor."""
        result = await dispatcher.dispatch(
            ActionType.RUN_TESTS, "order-service", TestType.PERFORMANCE_TEST, {}
        )

        assert result.message == "Performance test executed successfully"
        assert result.data["testType"] == "PERFORMANCE_TEST"

    @pytest.mark.asyncio
    async def test_analyze_failures_routed_by_action(self, dispatcher):
        """Test that ANALYZE_FAILURES uses its action executor."""
        result = await dispatcher.dispatch(
            ActionType.ANALYZE_FAILURES, "order-service", None, {}
        )

        assert result.message == "Failure analysis completed"
