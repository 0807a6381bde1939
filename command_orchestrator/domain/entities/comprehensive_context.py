"""Comprehensive context entity.

The ComprehensiveContext is the full output of the context analyzer: the
resolved command, dependency graph, execution plan, risk assessment, resource
estimate and guidance for the operator.
"""

from dataclasses import dataclass, field

from command_orchestrator.domain.entities.command import (
    ActionType,
    ParsedCommand,
    TestType,
)
from command_orchestrator.domain.entities.dependency_graph import DependencyGraph
from command_orchestrator.domain.entities.execution_plan import ExecutionPlan
from command_orchestrator.domain.entities.risk import RiskAssessment, Tier


@dataclass
class ResourceRequirements:
    """Estimated resources needed to run a command.

    Attributes:
        cpu: CPU tier
        memory: Memory tier
        storage: Storage tier
        network: Network tier
        external_dependencies: External resources, first-seen order
        priority: Scheduling priority label
    """

    cpu: Tier = Tier.MEDIUM
    memory: Tier = Tier.MEDIUM
    storage: Tier = Tier.LOW
    network: Tier = Tier.MEDIUM
    external_dependencies: list[str] = field(default_factory=list)
    priority: str = "NORMAL"


@dataclass(frozen=True)
class ComprehensiveContext:
    """Everything needed to decide on and execute a command.

    Immutable once built; shared read-only between the analyzer, the
    orchestrator and callers.

    Attributes:
        command: The raw command text
        parsed_command: Parser output (None when parsing failed)
        test_types: Resolved test types
        services: Resolved service names
        actions: Resolved actions
        dependency_graph: Dependency analysis result
        execution_plan: Ordered execution steps
        risk_assessment: Risk assessment
        resource_requirements: Resource estimate
        estimated_duration: Formatted total duration estimate
        warnings: Warnings for the operator
        suggestions: Suggestions for the operator
        confidence: Overall confidence in [0.0, 1.0]
    """

    command: str
    parsed_command: ParsedCommand | None = None
    test_types: tuple[TestType, ...] = ()
    services: tuple[str, ...] = ()
    actions: tuple[ActionType, ...] = ()
    dependency_graph: DependencyGraph = field(default_factory=DependencyGraph.empty)
    execution_plan: ExecutionPlan = field(default_factory=ExecutionPlan)
    risk_assessment: RiskAssessment = field(default_factory=RiskAssessment)
    resource_requirements: ResourceRequirements = field(
        default_factory=ResourceRequirements
    )
    estimated_duration: str = "0 minutes"
    warnings: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    confidence: float = 0.0

    @classmethod
    def failed(cls, command: str, error_message: str) -> "ComprehensiveContext":
        """Zero-confidence context returned when analysis fails."""
        return cls(
            command=command,
            warnings=(f"Error analyzing command: {error_message}",),
            confidence=0.0,
        )
