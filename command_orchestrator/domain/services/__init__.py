"""Domain services - Pure analysis and dispatch logic."""

from command_orchestrator.domain.services.action_dispatcher import ActionDispatcher
from command_orchestrator.domain.services.cancellation import CancellationToken
from command_orchestrator.domain.services.dependency_analysis_service import (
    DependencyAnalysisService,
)
from command_orchestrator.domain.services.duration_estimator import (
    DurationEstimator,
    format_duration,
    parse_duration_seconds,
    parse_range_upper_bound,
)
from command_orchestrator.domain.services.execution_plan_builder import (
    ExecutionPlanBuilder,
)
from command_orchestrator.domain.services.resource_estimator import ResourceEstimator
from command_orchestrator.domain.services.risk_assessment_service import (
    RiskAssessmentService,
)

__all__ = [
    "ActionDispatcher",
    "CancellationToken",
    "DependencyAnalysisService",
    "DurationEstimator",
    "ExecutionPlanBuilder",
    "ResourceEstimator",
    "RiskAssessmentService",
    "format_duration",
    "parse_duration_seconds",
    "parse_range_upper_bound",
]
