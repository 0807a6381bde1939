"""Simulated test-suite executor.

One executor instance serves one test type and reports a canned payload
from that type's profile. Real runners (Maven, pytest, ...) would replace it
behind the same interface.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from command_orchestrator.domain.entities.command import TestType
from command_orchestrator.domain.entities.execution_result import ExecutionResult
from command_orchestrator.infrastructure.executors.simulated_executor import (
    SimulatedExecutor,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TestRunProfile:
    """Nominal behaviour of a simulated test run."""

    __test__ = False

    label: str
    delay_seconds: float
    payload: dict[str, Any] = field(default_factory=dict)


TEST_RUN_PROFILES = {
    TestType.UNIT_TEST: TestRunProfile(
        "Unit",
        2.0,
        {"testsRun": 45, "testsPassed": 43, "testsFailed": 2, "coverage": "87.5%"},
    ),
    TestType.INTEGRATION_TEST: TestRunProfile(
        "Integration",
        5.0,
        {"testsRun": 12, "testsPassed": 11, "testsFailed": 1},
    ),
    TestType.API_TEST: TestRunProfile(
        "API",
        3.0,
        {"endpointsTested": 8, "testsRun": 24, "testsPassed": 24, "testsFailed": 0},
    ),
    TestType.CONTRACT_TEST: TestRunProfile(
        "Contract",
        2.5,
        {"contractsVerified": 6, "contractsFailed": 0},
    ),
    TestType.END_TO_END_TEST: TestRunProfile(
        "End-to-end",
        8.0,
        {"scenariosRun": 10, "scenariosPassed": 9, "scenariosFailed": 1},
    ),
    TestType.SMOKE_TEST: TestRunProfile(
        "Smoke",
        1.5,
        {"checksRun": 5, "checksPassed": 5},
    ),
    TestType.REGRESSION_TEST: TestRunProfile(
        "Regression",
        6.0,
        {"testsRun": 120, "testsPassed": 118, "testsFailed": 2, "regressionsFound": 0},
    ),
    TestType.EXPLORATORY_TEST: TestRunProfile(
        "Exploratory",
        4.0,
        {"sessionsCompleted": 3, "issuesFound": 2},
    ),
    TestType.ACCESSIBILITY_TEST: TestRunProfile(
        "Accessibility",
        3.5,
        {"pagesScanned": 12, "violations": 4, "wcagLevel": "AA"},
    ),
    TestType.COMPATIBILITY_TEST: TestRunProfile(
        "Compatibility",
        5.0,
        {"platformsTested": 6, "platformsPassed": 6},
    ),
    TestType.LOCALIZATION_TEST: TestRunProfile(
        "Localization",
        3.0,
        {"localesTested": 5, "missingTranslations": 3},
    ),
}


class SimulatedTestExecutor(SimulatedExecutor):
    """Runs a simulated suite for a single test type."""

    __test__ = False

    def __init__(self, test_type: TestType, delay_scale: float | None = None) -> None:
        super().__init__(delay_scale)
        if test_type not in TEST_RUN_PROFILES:
            raise ValueError(f"No simulated profile for test type: {test_type.value}")
        self.test_type = test_type
        self.profile = TEST_RUN_PROFILES[test_type]

    async def execute(
        self, service_name: str, parameters: dict[str, Any]
    ) -> ExecutionResult:
        logger.info(
            "test_run_started", service=service_name, test_type=self.test_type.value
        )
        await self.simulate(self.profile.delay_seconds)

        data = {
            "service": service_name,
            "testType": self.test_type.value,
            **self.profile.payload,
            "duration": f"{self.profile.delay_seconds:g}s",
        }
        if "environment" in parameters:
            data["environment"] = parameters["environment"]

        logger.info(
            "test_run_completed", service=service_name, test_type=self.test_type.value
        )
        return ExecutionResult.ok(
            f"{self.profile.label} tests executed successfully", data
        )
