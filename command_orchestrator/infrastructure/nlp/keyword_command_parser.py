"""Keyword-based natural-language command parser.

Recognises intents, services, test types and a handful of execution
parameters with word-boundary regular expressions. Candidates are reported in
the order they appear in the command. Nothing is defaulted here: a command
that names no service yields an empty service list.
"""

import re
from typing import Any, Iterable

import structlog

from command_orchestrator.domain.entities.command import (
    IntentType,
    ParsedCommand,
    TestType,
)
from command_orchestrator.domain.repositories.command_parser import (
    CommandParserInterface,
)
from command_orchestrator.infrastructure.registry.seed_registry import ALL_SERVICES

logger = structlog.get_logger(__name__)


def _words(*keywords: str) -> re.Pattern:
    alternatives = "|".join(re.escape(k).replace(r"\ ", r"\s+") for k in keywords)
    return re.compile(rf"\b(?:{alternatives})\b")


INTENT_PATTERNS = {
    IntentType.RUN_TESTS: _words("run", "execute", "start", "launch"),
    IntentType.ANALYZE_FAILURES: _words("analyze", "investigate", "debug", "examine"),
    IntentType.GENERATE_TESTS: _words("generate", "create", "write", "build"),
    IntentType.OPTIMIZE_TESTS: _words("optimize", "improve", "enhance", "tune"),
    IntentType.HEALTH_CHECK: _words("health", "check", "monitor"),
    IntentType.GET_STATUS: _words("status", "state", "info", "details"),
    IntentType.HELP: _words("help", "assist", "support", "guide"),
}

SERVICE_PATTERNS = {
    "user-service": _words("user", "users"),
    "product-service": _words("product", "products"),
    "order-service": _words("order", "orders"),
    "notification-service": _words("notification", "notifications"),
    "gateway-service": _words("gateway"),
}

ALL_SERVICES_PATTERN = _words("all", "everything", "entire")

TEST_TYPE_PATTERNS = {
    TestType.UNIT_TEST: _words("unit"),
    TestType.INTEGRATION_TEST: _words("integration"),
    TestType.CONTRACT_TEST: _words("contract", "pact"),
    TestType.API_TEST: _words("api", "rest", "endpoint"),
    TestType.PERFORMANCE_TEST: _words("performance", "perf", "load", "stress"),
    TestType.SECURITY_TEST: _words("security", "vulnerability"),
    TestType.CHAOS_TEST: _words("chaos", "fault injection", "resilience"),
    TestType.PENETRATION_TEST: _words("penetration", "pentest", "pen test"),
    TestType.END_TO_END_TEST: _words("e2e", "end-to-end", "end to end"),
    TestType.SMOKE_TEST: _words("smoke", "sanity"),
    TestType.REGRESSION_TEST: _words("regression"),
    TestType.EXPLORATORY_TEST: _words("exploratory"),
    TestType.ACCESSIBILITY_TEST: _words("accessibility", "a11y"),
    TestType.COMPATIBILITY_TEST: _words("compatibility", "cross-browser"),
    TestType.LOCALIZATION_TEST: _words("localization", "i18n", "l10n"),
}

_TIMEOUT_PATTERN = re.compile(
    r"\b(\d+)\s*(milliseconds?|ms|seconds?|secs?|s|minutes?|mins?|m|hours?|hrs?|h)\b"
)
_TIMEOUT_UNITS = {"ms": "ms", "s": "s", "m": "m", "h": "h"}
_RETRIES_PATTERN = re.compile(r"\b(\d+)\s*retr(?:y|ies)\b|\bretr(?:y|ies)\s*(\d+)\b")
_PARALLEL_PATTERN = _words("parallel", "concurrent", "concurrently")
_SEQUENTIAL_PATTERN = _words("sequential", "sequentially", "serial", "one by one")
_PRIORITY_PATTERN = re.compile(r"\bp([0-3])\b|\bpriority\s*([0-3])\b")
_PRIORITY_WORDS = {
    "HIGH": _words("urgent", "high priority", "asap"),
    "LOW": _words("low priority", "background"),
}
_ENVIRONMENT_PATTERN = re.compile(
    r"\b(?:in|on|against)\s+(?:the\s+)?"
    r"(dev|development|qa|uat|staging|stage|prod|production)\b"
)
_ENVIRONMENT_ALIASES = {
    "development": "dev",
    "stage": "staging",
    "production": "prod",
}

_ELEMENT_WEIGHT = 0.3
_PARAMETER_WEIGHT = 0.1


class KeywordCommandParser(CommandParserInterface):
    """Parse commands with keyword tables.

    Confidence is 0.3 for each non-empty element list (intents, services,
    test types) plus 0.1 when any parameter was extracted, capped at 1.0.
    """

    def __init__(self, known_services: Iterable[str] = ALL_SERVICES):
        self._known_services = list(known_services)

    def parse(self, command: str) -> ParsedCommand:
        text = _normalize(command)

        intents = _find_in_order(INTENT_PATTERNS, text)
        services = self._extract_services(text)
        test_types = _find_in_order(TEST_TYPE_PATTERNS, text)
        parameters = _extract_parameters(text)
        confidence = self._calculate_confidence(
            intents, services, test_types, parameters
        )

        logger.debug(
            "command_parsed",
            intents=[i.value for i in intents],
            services=services,
            test_types=[t.value for t in test_types],
            parameters=parameters,
            confidence=confidence,
        )
        return ParsedCommand(
            original_command=command,
            intents=intents,
            services=services,
            test_types=test_types,
            parameters=parameters,
            confidence=confidence,
        )

    def _extract_services(self, text: str) -> list[str]:
        if ALL_SERVICES_PATTERN.search(text):
            return list(self._known_services)
        return _find_in_order(SERVICE_PATTERNS, text)

    @staticmethod
    def _calculate_confidence(
        intents: list[IntentType],
        services: list[str],
        test_types: list[TestType],
        parameters: dict[str, Any],
    ) -> float:
        confidence = 0.0
        for elements in (intents, services, test_types):
            if elements:
                confidence += _ELEMENT_WEIGHT
        if parameters:
            confidence += _PARAMETER_WEIGHT
        return round(min(confidence, 1.0), 2)


def _normalize(command: str | None) -> str:
    if not command:
        return ""
    return re.sub(r"\s+", " ", command.lower()).strip()


def _find_in_order(patterns: dict, text: str) -> list:
    """Keys whose pattern matches, ordered by first match position."""
    found = []
    for key, pattern in patterns.items():
        match = pattern.search(text)
        if match:
            found.append((match.start(), key))
    found.sort(key=lambda item: item[0])
    return [key for _, key in found]


def _extract_parameters(text: str) -> dict[str, Any]:
    parameters: dict[str, Any] = {}

    timeout = _TIMEOUT_PATTERN.search(text)
    if timeout:
        amount, unit = timeout.groups()
        parameters["timeout"] = f"{amount}{_unit_suffix(unit)}"

    retries = _RETRIES_PATTERN.search(text)
    if retries:
        parameters["retries"] = int(retries.group(1) or retries.group(2))

    if _PARALLEL_PATTERN.search(text):
        parameters["parallel"] = True
    elif _SEQUENTIAL_PATTERN.search(text):
        parameters["parallel"] = False

    priority = _PRIORITY_PATTERN.search(text)
    if priority:
        parameters["priority"] = f"P{priority.group(1) or priority.group(2)}"
    else:
        for label, pattern in _PRIORITY_WORDS.items():
            if pattern.search(text):
                parameters["priority"] = label
                break

    environment = _ENVIRONMENT_PATTERN.search(text)
    if environment:
        name = environment.group(1)
        parameters["environment"] = _ENVIRONMENT_ALIASES.get(name, name)

    return parameters


def _unit_suffix(unit: str) -> str:
    if unit.startswith("ms") or unit.startswith("milli"):
        return "ms"
    return _TIMEOUT_UNITS[unit[0]]
