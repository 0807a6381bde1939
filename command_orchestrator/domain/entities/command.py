"""Command vocabulary entities.

This module defines the enumerations shared by the parser, the context
analyzer and the orchestrator, and the ParsedCommand produced by the
natural-language parser.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TestType(str, Enum):
    """Kinds of test a command can request."""

    UNIT_TEST = "UNIT_TEST"
    INTEGRATION_TEST = "INTEGRATION_TEST"
    CONTRACT_TEST = "CONTRACT_TEST"
    API_TEST = "API_TEST"
    PERFORMANCE_TEST = "PERFORMANCE_TEST"
    SECURITY_TEST = "SECURITY_TEST"
    CHAOS_TEST = "CHAOS_TEST"
    PENETRATION_TEST = "PENETRATION_TEST"
    END_TO_END_TEST = "END_TO_END_TEST"
    SMOKE_TEST = "SMOKE_TEST"
    REGRESSION_TEST = "REGRESSION_TEST"
    EXPLORATORY_TEST = "EXPLORATORY_TEST"
    ACCESSIBILITY_TEST = "ACCESSIBILITY_TEST"
    COMPATIBILITY_TEST = "COMPATIBILITY_TEST"
    LOCALIZATION_TEST = "LOCALIZATION_TEST"

    # Keeps pytest from collecting this enum as a test class
    __test__ = False

    @property
    def display_name(self) -> str:
        """Human-readable name (e.g. "End-to-End Test")."""
        return _TEST_TYPE_DISPLAY_NAMES[self]


_TEST_TYPE_DISPLAY_NAMES = {
    TestType.UNIT_TEST: "Unit Test",
    TestType.INTEGRATION_TEST: "Integration Test",
    TestType.CONTRACT_TEST: "Contract Test",
    TestType.API_TEST: "API Test",
    TestType.PERFORMANCE_TEST: "Performance Test",
    TestType.SECURITY_TEST: "Security Test",
    TestType.CHAOS_TEST: "Chaos Test",
    TestType.PENETRATION_TEST: "Penetration Test",
    TestType.END_TO_END_TEST: "End-to-End Test",
    TestType.SMOKE_TEST: "Smoke Test",
    TestType.REGRESSION_TEST: "Regression Test",
    TestType.EXPLORATORY_TEST: "Exploratory Test",
    TestType.ACCESSIBILITY_TEST: "Accessibility Test",
    TestType.COMPATIBILITY_TEST: "Compatibility Test",
    TestType.LOCALIZATION_TEST: "Localization Test",
}


class IntentType(str, Enum):
    """High-level intents recognised in a command."""

    RUN_TESTS = "RUN_TESTS"
    ANALYZE_FAILURES = "ANALYZE_FAILURES"
    GENERATE_TESTS = "GENERATE_TESTS"
    OPTIMIZE_TESTS = "OPTIMIZE_TESTS"
    HEALTH_CHECK = "HEALTH_CHECK"
    GET_STATUS = "GET_STATUS"
    HELP = "HELP"
    UNKNOWN = "UNKNOWN"


class ActionType(str, Enum):
    """Concrete actions the orchestrator can dispatch."""

    RUN_TESTS = "RUN_TESTS"
    RUN_PERFORMANCE_TESTS = "RUN_PERFORMANCE_TESTS"
    RUN_SECURITY_TESTS = "RUN_SECURITY_TESTS"
    RUN_INTEGRATION_TESTS = "RUN_INTEGRATION_TESTS"
    RUN_CHAOS_TESTS = "RUN_CHAOS_TESTS"
    ANALYZE_FAILURES = "ANALYZE_FAILURES"
    GENERATE_TESTS = "GENERATE_TESTS"
    OPTIMIZE_TESTS = "OPTIMIZE_TESTS"
    HEALTH_CHECK = "HEALTH_CHECK"
    MONITOR_SYSTEM = "MONITOR_SYSTEM"
    GENERATE_REPORT = "GENERATE_REPORT"
    SELF_HEAL = "SELF_HEAL"
    SCALE_RESOURCES = "SCALE_RESOURCES"
    UNKNOWN = "UNKNOWN"


@dataclass
class ParsedCommand:
    """Structured output of the natural-language parser.

    Attributes:
        original_command: The raw command text
        intents: Candidate high-level intents, in detection order
        services: Candidate service names, in detection order
        test_types: Candidate test types, in detection order
        parameters: Free-form parameters extracted from the text
        confidence: Parser confidence score in [0.0, 1.0]
    """

    original_command: str
    intents: list[IntentType] = field(default_factory=list)
    services: list[str] = field(default_factory=list)
    test_types: list[TestType] = field(default_factory=list)
    parameters: dict[str, Any] = field(default_factory=dict)
    confidence: float = 0.0

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"confidence must be in [0.0, 1.0], got: {self.confidence}"
            )
