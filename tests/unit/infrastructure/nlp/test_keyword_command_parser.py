"""Unit tests for KeywordCommandParser."""

import pytest

from command_orchestrator.domain.entities.command import IntentType, TestType
from command_orchestrator.infrastructure.nlp.keyword_command_parser import (
    KeywordCommandParser,
)
from command_orchestrator.infrastructure.registry.seed_registry import ALL_SERVICES


class TestKeywordCommandParser:
    """Test cases for keyword parsing."""

    @pytest.fixture
    def parser(self):
        """Parser over the default service catalogue."""
        return KeywordCommandParser()

    def test_parse_integration_command(self, parser):
        """Test the reference integration test command."""
        command = "run integration tests for user-service and product-service"

        parsed = parser.parse(command)

        assert parsed.original_command == command
        assert parsed.intents == [IntentType.RUN_TESTS]
        assert parsed.services == ["user-service", "product-service"]
        assert parsed.test_types == [TestType.INTEGRATION_TEST]
        assert parsed.parameters == {}
        assert parsed.confidence == 0.9

    def test_candidates_follow_text_order(self, parser):
        """Test that services and test types are reported in mention order."""
        parsed = parser.parse(
            "execute smoke and unit tests on the order gateway and user services"
        )

        assert parsed.services == ["order-service", "gateway-service", "user-service"]
        assert parsed.test_types == [TestType.SMOKE_TEST, TestType.UNIT_TEST]

    def test_all_services_keyword(self, parser):
        """Test that 'all' selects every known service."""
        parsed = parser.parse("run regression tests across all services")

        assert parsed.services == list(ALL_SERVICES)
        assert parsed.test_types == [TestType.REGRESSION_TEST]

    def test_custom_known_services(self):
        """Test that 'everything' uses the configured service list."""
        parser = KeywordCommandParser(known_services=["billing-service"])

        parsed = parser.parse("health check everything")

        assert parsed.services == ["billing-service"]
        assert parsed.intents == [IntentType.HEALTH_CHECK]

    def test_multi_word_keywords(self, parser):
        """Test keywords spanning several words."""
        parsed = parser.parse("start fault  injection and end to end tests for orders")

        assert parsed.test_types == [TestType.CHAOS_TEST, TestType.END_TO_END_TEST]
        assert parsed.services == ["order-service"]

    def test_keywords_match_whole_words_only(self, parser):
        """Test that keywords inside other words are ignored."""
        parsed = parser.parse("restart the unitary producer")

        assert parsed.intents == []
        assert parsed.services == []
        assert parsed.test_types == []
        assert parsed.confidence == 0.0

    def test_case_insensitive(self, parser):
        """Test that matching ignores case."""
        parsed = parser.parse("RUN Performance Tests on ORDER-SERVICE")

        assert parsed.intents == [IntentType.RUN_TESTS]
        assert parsed.services == ["order-service"]
        assert parsed.test_types == [TestType.PERFORMANCE_TEST]

    @pytest.mark.parametrize(
        "command,expected",
        [
            ("run unit tests with 300 seconds timeout", {"timeout": "300s"}),
            ("run unit tests timeout 5 minutes", {"timeout": "5m"}),
            ("run unit tests within 2h", {"timeout": "2h"}),
            ("run unit tests within 1500ms", {"timeout": "1500ms"}),
            ("run unit tests with 3 retries", {"retries": 3}),
            ("run unit tests retry 2", {"retries": 2}),
            ("run unit tests in parallel", {"parallel": True}),
            ("run unit tests one by one", {"parallel": False}),
            ("run unit tests p1", {"priority": "P1"}),
            ("run unit tests asap", {"priority": "HIGH"}),
            ("run unit tests in the background", {"priority": "LOW"}),
            ("run unit tests against production", {"environment": "prod"}),
            ("run unit tests on staging", {"environment": "staging"}),
        ],
    )
    def test_extract_parameters(self, parser, command, expected):
        """Test parameter extraction."""
        parsed = parser.parse(command)

        assert parsed.parameters == expected

    def test_parameters_add_to_confidence(self, parser):
        """Test the parameter bonus and the confidence cap."""
        parsed = parser.parse(
            "run unit tests for user-service in parallel with 2 retries"
        )

        assert parsed.parameters == {"retries": 2, "parallel": True}
        assert parsed.confidence == 1.0

    def test_partial_confidence(self, parser):
        """Test confidence with only some elements found."""
        parsed = parser.parse("analyze failures")

        assert parsed.intents == [IntentType.ANALYZE_FAILURES]
        assert parsed.confidence == 0.3

    @pytest.mark.parametrize("command", ["", "   ", None])
    def test_empty_command(self, parser, command):
        """Test that empty input parses to nothing."""
        parsed = parser.parse(command)

        assert parsed.intents == []
        assert parsed.services == []
        assert parsed.test_types == []
        assert parsed.parameters == {}
        assert parsed.confidence == 0.0
