"""Unit tests for AnalyzeCommandUseCase."""

from unittest.mock import MagicMock

import pytest

from command_orchestrator.domain.entities.command import (
    ActionType,
    IntentType,
    ParsedCommand,
    TestType,
)
from command_orchestrator.domain.entities.execution_plan import ExecutionStrategy
from command_orchestrator.domain.entities.risk import RiskLevel, SeverityLevel
from command_orchestrator.infrastructure.dependencies import (
    get_analyze_command_use_case,
)

SCENARIO_COMMAND = "run integration tests for user-service and product-service"


def _parser_returning(parsed: ParsedCommand) -> MagicMock:
    parser = MagicMock()
    parser.parse.return_value = parsed
    return parser


class TestAnalyzeCommandUseCase:
    """Test cases for command context analysis."""

    @pytest.fixture
    def scenario_parsed(self):
        """Parsed form of the integration test scenario command."""
        return ParsedCommand(
            original_command=SCENARIO_COMMAND,
            intents=[IntentType.RUN_TESTS],
            services=["user-service", "product-service"],
            test_types=[TestType.INTEGRATION_TEST],
            confidence=0.9,
        )

    def test_integration_scenario(self, scenario_parsed):
        """Test the two-service integration scenario end to end."""
        use_case = get_analyze_command_use_case(_parser_returning(scenario_parsed))

        context = use_case.execute(SCENARIO_COMMAND)

        assert context.command == SCENARIO_COMMAND
        assert context.test_types == (TestType.INTEGRATION_TEST,)
        assert context.services == ("user-service", "product-service")
        assert context.actions == (ActionType.RUN_TESTS,)
        assert len(context.execution_plan.steps) == 2
        assert context.execution_plan.execution_strategy == ExecutionStrategy.SEQUENTIAL
        # 0.4 x 0.9 + 3 x 0.2
        assert context.confidence == pytest.approx(0.96)
        assert context.estimated_duration == "30 minutes"
        assert context.suggestions == ()

    def test_command_parameters_reach_plan_steps(self):
        """Test that parsed timeout and retries land in every step."""
        use_case = get_analyze_command_use_case()

        context = use_case.analyze_command(
            "run unit tests for user-service with 3 retries within 5 minutes"
        )

        assert context.parsed_command.parameters == {"timeout": "5m", "retries": 3}
        step = context.execution_plan.steps[0]
        assert step.parameters["timeout"] == "5m"
        assert step.parameters["retries"] == 3

    def test_defaults_when_parser_finds_nothing(self, registry):
        """Test unit+integration on every service with RUN_TESTS."""
        use_case = get_analyze_command_use_case(
            _parser_returning(ParsedCommand(original_command="do something"))
        )

        context = use_case.analyze_command("do something")

        assert context.test_types == (TestType.UNIT_TEST, TestType.INTEGRATION_TEST)
        assert list(context.services) == registry.known_services()
        assert context.services[0] == "user-service"
        assert context.services[-1] == "gateway-service"
        assert context.actions == (ActionType.RUN_TESTS,)
        assert len(context.execution_plan.steps) == 10
        # parser confidence 0.0, three defaulted non-empty lists
        assert context.confidence == pytest.approx(0.6)

    def test_explicit_context_confidence_at_least_point_six(self, scenario_parsed):
        """Test the confidence floor for fully resolved commands."""
        scenario_parsed.confidence = 0.0
        use_case = get_analyze_command_use_case(_parser_returning(scenario_parsed))

        assert use_case.analyze_command(SCENARIO_COMMAND).confidence >= 0.6

    def test_chaos_on_order_service(self):
        """Test HIGH risk, SEQUENTIAL plan and chaos suggestions."""
        parsed = ParsedCommand(
            original_command="run chaos tests on order-service",
            intents=[IntentType.RUN_TESTS],
            services=["order-service"],
            test_types=[TestType.CHAOS_TEST],
            confidence=0.9,
        )
        use_case = get_analyze_command_use_case(_parser_returning(parsed))

        context = use_case.analyze_command(parsed.original_command)

        assert context.risk_assessment.overall_risk_level == RiskLevel.HIGH
        assert context.dependency_graph.severity_level == SeverityLevel.HIGH
        assert context.execution_plan.execution_strategy == ExecutionStrategy.SEQUENTIAL
        assert "HIGH RISK: Chaos Test may cause system disruption" in context.warnings
        assert context.suggestions == (
            "Enable comprehensive monitoring during chaos testing",
            "Prepare rollback procedures",
        )

    def test_parallel_suggestion(self):
        """Test the parallel suggestion for parallelizable test types."""
        parsed = ParsedCommand(
            original_command="run unit tests on product-service",
            intents=[IntentType.RUN_TESTS],
            services=["product-service"],
            test_types=[TestType.UNIT_TEST, TestType.API_TEST],
        )
        use_case = get_analyze_command_use_case(_parser_returning(parsed))

        context = use_case.analyze_command(parsed.original_command)

        assert context.execution_plan.execution_strategy == ExecutionStrategy.PARALLEL
        assert context.suggestions == (
            "Consider parallel execution to reduce total time",
        )

    def test_intents_map_to_actions(self):
        """Test intent -> action mapping with unmapped intents dropped."""
        parsed = ParsedCommand(
            original_command="status and help, then analyze and run",
            intents=[
                IntentType.GET_STATUS,
                IntentType.HELP,
                IntentType.ANALYZE_FAILURES,
                IntentType.RUN_TESTS,
                IntentType.ANALYZE_FAILURES,
            ],
            services=["user-service"],
            test_types=[TestType.UNIT_TEST],
        )
        use_case = get_analyze_command_use_case(_parser_returning(parsed))

        context = use_case.analyze_command(parsed.original_command)

        assert context.actions == (ActionType.ANALYZE_FAILURES, ActionType.RUN_TESTS)

    def test_only_unmapped_intents_default_to_run_tests(self):
        """Test that HELP/GET_STATUS alone fall back to RUN_TESTS."""
        parsed = ParsedCommand(
            original_command="help",
            intents=[IntentType.HELP],
            services=["user-service"],
            test_types=[TestType.UNIT_TEST],
        )
        use_case = get_analyze_command_use_case(_parser_returning(parsed))

        assert use_case.analyze_command("help").actions == (ActionType.RUN_TESTS,)

    def test_duplicate_elements_are_removed(self):
        """Test de-duplication of parsed services and test types."""
        parsed = ParsedCommand(
            original_command="dup",
            intents=[IntentType.RUN_TESTS],
            services=["user-service", "user-service"],
            test_types=[TestType.UNIT_TEST, TestType.UNIT_TEST],
        )
        use_case = get_analyze_command_use_case(_parser_returning(parsed))

        context = use_case.analyze_command("dup")

        assert context.services == ("user-service",)
        assert context.test_types == (TestType.UNIT_TEST,)
        assert len(context.execution_plan.steps) == 1

    def test_parser_failure_returns_zero_confidence_context(self):
        """Test that analysis never raises."""
        parser = MagicMock()
        parser.parse.side_effect = RuntimeError("tokenizer exploded")
        use_case = get_analyze_command_use_case(parser)

        context = use_case.analyze_command("anything")

        assert context.confidence == 0.0
        assert context.warnings == ("Error analyzing command: tokenizer exploded",)
        assert context.execution_plan.steps == []
        assert context.parsed_command is None

    def test_step_can_be_substituted(self, scenario_parsed, monkeypatch):
        """Test that an individual analysis step can be replaced."""
        use_case = get_analyze_command_use_case(_parser_returning(scenario_parsed))
        monkeypatch.setattr(
            use_case, "generate_suggestions", lambda test_types: ["custom"]
        )

        context = use_case.analyze_command(SCENARIO_COMMAND)

        assert context.suggestions == ("custom",)

    def test_calculate_confidence_is_capped(self, scenario_parsed):
        """Test that confidence never exceeds 1.0."""
        scenario_parsed.confidence = 1.0
        use_case = get_analyze_command_use_case(_parser_returning(scenario_parsed))

        confidence = use_case.calculate_confidence(
            scenario_parsed,
            [TestType.UNIT_TEST],
            ["user-service"],
            [ActionType.RUN_TESTS],
        )

        assert confidence == 1.0

    def test_calculate_confidence_without_parse(self):
        """Test confidence when no parsed command is available."""
        use_case = get_analyze_command_use_case(MagicMock())

        assert use_case.calculate_confidence(None, [], [], []) == 0.0
