"""Use case for command context analysis.

Turns a raw operational command into a ComprehensiveContext:
1. Parse the command
2. Resolve test types, services and actions (with defaults)
3. Analyze dependencies and blast radius
4. Build the execution plan
5. Assess risk, resources and duration
6. Derive warnings, suggestions and overall confidence
"""

import logging
import time

from command_orchestrator.domain.entities.command import (
    ActionType,
    IntentType,
    ParsedCommand,
    TestType,
)
from command_orchestrator.domain.entities.comprehensive_context import (
    ComprehensiveContext,
)
from command_orchestrator.domain.entities.dependency_graph import DependencyGraph
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.entities.risk import RiskAssessment
from command_orchestrator.domain.repositories.command_parser import (
    CommandParserInterface,
)
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
from command_orchestrator.infrastructure.observability.metrics import (
    record_command_analysis,
)

logger = logging.getLogger(__name__)

DEFAULT_TEST_TYPES = (TestType.UNIT_TEST, TestType.INTEGRATION_TEST)
DEFAULT_ACTIONS = (ActionType.RUN_TESTS,)

INTENT_ACTIONS = {
    IntentType.RUN_TESTS: ActionType.RUN_TESTS,
    IntentType.ANALYZE_FAILURES: ActionType.ANALYZE_FAILURES,
    IntentType.GENERATE_TESTS: ActionType.GENERATE_TESTS,
    IntentType.OPTIMIZE_TESTS: ActionType.OPTIMIZE_TESTS,
    IntentType.HEALTH_CHECK: ActionType.HEALTH_CHECK,
}

PARALLEL_SUGGESTION = "Consider parallel execution to reduce total time"
CHAOS_SUGGESTIONS = (
    "Enable comprehensive monitoring during chaos testing",
    "Prepare rollback procedures",
)

_PARSER_CONFIDENCE_WEIGHT = 0.4
_COMPLETENESS_WEIGHT = 0.2


class AnalyzeCommandUseCase:
    """Analyze a natural-language command into a ComprehensiveContext.

    Every step is a separate method so it can be replaced or patched
    independently. analyze_command() never raises.
    """

    def __init__(
        self,
        command_parser: CommandParserInterface,
        registry: ContextRegistry,
        dependency_analysis_service: DependencyAnalysisService,
        plan_builder: ExecutionPlanBuilder,
        risk_assessment_service: RiskAssessmentService,
        resource_estimator: ResourceEstimator,
        duration_estimator: DurationEstimator,
    ):
        self._parser = command_parser
        self._registry = registry
        self._dependency_analysis = dependency_analysis_service
        self._plan_builder = plan_builder
        self._risk_assessment = risk_assessment_service
        self._resource_estimator = resource_estimator
        self._duration_estimator = duration_estimator

    def execute(self, command: str) -> ComprehensiveContext:
        return self.analyze_command(command)

    def analyze_command(self, command: str) -> ComprehensiveContext:
        """Analyze a raw command.

        Args:
            command: Raw command text

        Returns:
            ComprehensiveContext. On any failure a context with confidence 0.0
            and a single "Error analyzing command: ..." warning is returned.
        """
        logger.info(f"Analyzing command: {command}")
        start = time.perf_counter()
        try:
            parsed = self.parse(command)
            test_types = self.resolve_test_types(parsed)
            services = self.resolve_services(parsed)
            actions = self.resolve_actions(parsed)

            graph = self.analyze_dependencies(test_types, services, actions)
            plan = self._plan_builder.build(
                test_types, services, actions, graph, parsed.parameters
            )
            risk = self.assess_risk(test_types, services, actions)
            resources = self._resource_estimator.estimate(test_types, services)
            duration = self._duration_estimator.estimate(test_types, services, actions)

            warnings = self.generate_warnings(risk)
            suggestions = self.generate_suggestions(test_types)
            confidence = self.calculate_confidence(parsed, test_types, services, actions)

            context = ComprehensiveContext(
                command=command,
                parsed_command=parsed,
                test_types=tuple(test_types),
                services=tuple(services),
                actions=tuple(actions),
                dependency_graph=graph,
                execution_plan=plan,
                risk_assessment=risk,
                resource_requirements=resources,
                estimated_duration=duration,
                warnings=tuple(warnings),
                suggestions=tuple(suggestions),
                confidence=confidence,
            )
            record_command_analysis(
                outcome="success", duration=time.perf_counter() - start
            )
            logger.info(
                f"Command analysis completed with confidence: {confidence:.2f}, "
                f"{len(plan.steps)} steps, strategy={plan.execution_strategy.value}"
            )
            return context
        except Exception as e:
            logger.error(f"Error analyzing command: {e}", exc_info=True)
            record_command_analysis(
                outcome="error", duration=time.perf_counter() - start
            )
            return ComprehensiveContext.failed(command, str(e))

    def parse(self, command: str) -> ParsedCommand:
        return self._parser.parse(command)

    def resolve_test_types(self, parsed: ParsedCommand) -> list[TestType]:
        """Parsed test types (de-duplicated), else unit + integration."""
        test_types = list(dict.fromkeys(parsed.test_types))
        return test_types or list(DEFAULT_TEST_TYPES)

    def resolve_services(self, parsed: ParsedCommand) -> list[str]:
        """Parsed services (de-duplicated), else every registered service."""
        services = list(dict.fromkeys(parsed.services))
        return services or self._registry.known_services()

    def resolve_actions(self, parsed: ParsedCommand) -> list[ActionType]:
        """Map intents to actions; unmapped intents are dropped."""
        actions: list[ActionType] = []
        for intent in parsed.intents:
            action = INTENT_ACTIONS.get(intent)
            if action is not None and action not in actions:
                actions.append(action)
        return actions or list(DEFAULT_ACTIONS)

    def analyze_dependencies(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> DependencyGraph:
        return self._dependency_analysis.analyze_dependencies(
            test_types, services, actions
        )

    def assess_risk(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> RiskAssessment:
        return self._risk_assessment.assess(test_types, services, actions)

    def generate_warnings(self, risk: RiskAssessment) -> list[str]:
        return list(risk.warnings)

    def generate_suggestions(self, test_types: list[TestType]) -> list[str]:
        suggestions: list[str] = []
        if self._plan_builder.all_parallelizable(test_types):
            suggestions.append(PARALLEL_SUGGESTION)
        if TestType.CHAOS_TEST in test_types:
            suggestions.extend(CHAOS_SUGGESTIONS)
        return suggestions

    def calculate_confidence(
        self,
        parsed: ParsedCommand | None,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> float:
        """0.4 x parser confidence + 0.2 per non-empty element list, capped at 1.0."""
        confidence = 0.0
        if parsed is not None:
            confidence += parsed.confidence * _PARSER_CONFIDENCE_WEIGHT
        for elements in (test_types, services, actions):
            if elements:
                confidence += _COMPLETENESS_WEIGHT
        return min(confidence, 1.0)
