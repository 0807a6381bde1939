"""Dependency wiring.

Factory functions that build the analyzer and orchestrator with their
collaborators. The registry, execution store, dispatcher and orchestrator
are process-wide singletons; reset_dependencies() drops them (tests) and
shutdown_dependencies() closes the executors before dropping them.
"""

from command_orchestrator.application.use_cases.analyze_command import (
    AnalyzeCommandUseCase,
)
from command_orchestrator.application.use_cases.orchestrate_execution import (
    ExecutionOrchestrator,
)
from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.repositories.command_parser import (
    CommandParserInterface,
)
from command_orchestrator.domain.services.action_dispatcher import ActionDispatcher
from command_orchestrator.domain.services.dependency_analysis_service import (
    DependencyAnalysisService,
)
from command_orchestrator.domain.services.duration_estimator import DurationEstimator
from command_orchestrator.domain.services.execution_plan_builder import (
    ExecutionPlanBuilder,
)
from command_orchestrator.domain.services.resource_estimator import ResourceEstimator
from command_orchestrator.domain.services.risk_assessment_service import (
    RiskAssessmentService,
)
from command_orchestrator.infrastructure.config.settings import get_settings
from command_orchestrator.infrastructure.executors.http_health_check_executor import (
    HttpHealthCheckExecutor,
)
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
from command_orchestrator.infrastructure.nlp.keyword_command_parser import (
    KeywordCommandParser,
)
from command_orchestrator.infrastructure.observability.logging import configure_logging
from command_orchestrator.infrastructure.observability.tracing import setup_tracing
from command_orchestrator.infrastructure.registry.seed_registry import (
    build_default_registry,
)
from command_orchestrator.infrastructure.stores.in_memory_execution_store import (
    InMemoryExecutionStore,
)

_registry: ContextRegistry | None = None
_execution_store: InMemoryExecutionStore | None = None
_dispatcher: ActionDispatcher | None = None
_orchestrator: ExecutionOrchestrator | None = None
_observability_initialized = False


# Shared state


def get_registry() -> ContextRegistry:
    """Get the shared ContextRegistry (seed data)."""
    global _registry
    if _registry is None:
        _registry = build_default_registry()
    return _registry


def get_execution_store() -> InMemoryExecutionStore:
    """Get the shared InMemoryExecutionStore."""
    global _execution_store
    if _execution_store is None:
        _execution_store = InMemoryExecutionStore(
            max_tracked=get_settings().execution.max_tracked_executions
        )
    return _execution_store


# Analysis


def get_command_parser() -> CommandParserInterface:
    """Get KeywordCommandParser instance."""
    return KeywordCommandParser(known_services=get_registry().known_services())


def get_analyze_command_use_case(
    command_parser: CommandParserInterface | None = None,
) -> AnalyzeCommandUseCase:
    """Get AnalyzeCommandUseCase instance.

    Args:
        command_parser: Parser override (defaults to the keyword parser)
    """
    registry = get_registry()
    return AnalyzeCommandUseCase(
        command_parser=command_parser or get_command_parser(),
        registry=registry,
        dependency_analysis_service=DependencyAnalysisService(registry),
        plan_builder=ExecutionPlanBuilder(registry),
        risk_assessment_service=RiskAssessmentService(registry),
        resource_estimator=ResourceEstimator(registry),
        duration_estimator=DurationEstimator(registry),
    )


# Execution


def build_action_dispatcher(delay_scale: float | None = None) -> ActionDispatcher:
    """Build a dispatcher with the default executors registered.

    Args:
        delay_scale: Simulated delay multiplier (defaults to settings)
    """
    dispatcher = ActionDispatcher()
    for test_type in TEST_RUN_PROFILES:
        dispatcher.register_test_type(
            test_type, SimulatedTestExecutor(test_type, delay_scale)
        )
    dispatcher.register_test_type(
        TestType.PERFORMANCE_TEST, SimulatedPerformanceExecutor(delay_scale)
    )
    dispatcher.register_test_type(
        TestType.SECURITY_TEST, SimulatedSecurityExecutor(delay_scale)
    )
    dispatcher.register_test_type(
        TestType.CHAOS_TEST, SimulatedChaosExecutor(delay_scale)
    )

    dispatcher.register_action(
        ActionType.ANALYZE_FAILURES, SimulatedFailureAnalysisExecutor(delay_scale)
    )
    dispatcher.register_action(
        ActionType.HEALTH_CHECK, HttpHealthCheckExecutor(get_registry())
    )
    return dispatcher


def get_action_dispatcher() -> ActionDispatcher:
    """Get the shared ActionDispatcher."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = build_action_dispatcher()
    return _dispatcher


def get_execution_orchestrator() -> ExecutionOrchestrator:
    """Get the shared ExecutionOrchestrator."""
    global _orchestrator
    if _orchestrator is None:
        execution_config = get_settings().execution
        _orchestrator = ExecutionOrchestrator(
            dispatcher=get_action_dispatcher(),
            execution_store=get_execution_store(),
            default_step_timeout=execution_config.default_step_timeout_seconds,
            max_parallel_steps=execution_config.max_parallel_steps,
        )
    return _orchestrator


def reset_dependencies() -> None:
    """Drop all cached singletons."""
    global _registry, _execution_store, _dispatcher, _orchestrator
    _registry = None
    _execution_store = None
    _dispatcher = None
    _orchestrator = None


async def shutdown_dependencies() -> None:
    """Close the shared dispatcher's executors and drop all singletons.

    This should be called during application shutdown. It releases the
    health check HTTP client.
    """
    if _dispatcher is not None:
        await _dispatcher.close()
    reset_dependencies()


# Observability


def init_observability() -> None:
    """Configure structured logging and tracing for the process.

    Call once at startup, before the first command is analyzed. Later calls
    are ignored.
    """
    global _observability_initialized
    if _observability_initialized:
        return
    configure_logging()
    setup_tracing()
    _observability_initialized = True
