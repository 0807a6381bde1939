"""Action executors - simulated runners and HTTP health checks."""

from command_orchestrator.infrastructure.executors.http_health_check_executor import (
    HealthCheckError,
    HttpHealthCheckExecutor,
    ServiceUnreachableError,
)
from command_orchestrator.infrastructure.executors.simulated_chaos_executor import (
    SimulatedChaosExecutor,
)
from command_orchestrator.infrastructure.executors.simulated_executor import (
    SimulatedExecutor,
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

__all__ = [
    # Simulated
    "SimulatedExecutor",
    "SimulatedTestExecutor",
    "TEST_RUN_PROFILES",
    "SimulatedChaosExecutor",
    "SimulatedPerformanceExecutor",
    "SimulatedSecurityExecutor",
    "SimulatedFailureAnalysisExecutor",
    # HTTP
    "HttpHealthCheckExecutor",
    "HealthCheckError",
    "ServiceUnreachableError",
]
