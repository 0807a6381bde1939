"""Domain entities - Core business objects."""

from command_orchestrator.domain.entities.command import (
    ActionType,
    IntentType,
    ParsedCommand,
    TestType,
)
from command_orchestrator.domain.entities.comprehensive_context import (
    ComprehensiveContext,
    ResourceRequirements,
)
from command_orchestrator.domain.entities.dependency_graph import (
    DependencyGraph,
    ImpactAnalysis,
    RiskFactors,
)
from command_orchestrator.domain.entities.execution_plan import (
    ExecutionPlan,
    ExecutionStep,
    ExecutionStrategy,
    StepStatus,
    build_step_id,
)
from command_orchestrator.domain.entities.execution_result import (
    ExecutionResult,
    ExecutionStatus,
)
from command_orchestrator.domain.entities.registry import (
    ActionContext,
    ContextRegistry,
    ExecutionTimeRange,
    ServiceContext,
    TestTypeContext,
)
from command_orchestrator.domain.entities.risk import (
    RiskAssessment,
    RiskLevel,
    SeverityLevel,
    Tier,
)

__all__ = [
    # Command vocabulary
    "TestType",
    "IntentType",
    "ActionType",
    "ParsedCommand",
    # Risk
    "RiskLevel",
    "Tier",
    "SeverityLevel",
    "RiskAssessment",
    # Registry
    "ExecutionTimeRange",
    "TestTypeContext",
    "ServiceContext",
    "ActionContext",
    "ContextRegistry",
    # Dependency analysis
    "DependencyGraph",
    "ImpactAnalysis",
    "RiskFactors",
    # Execution plan
    "ExecutionPlan",
    "ExecutionStep",
    "ExecutionStrategy",
    "StepStatus",
    "build_step_id",
    # Execution result
    "ExecutionResult",
    "ExecutionStatus",
    # Comprehensive context
    "ComprehensiveContext",
    "ResourceRequirements",
]
