"""Simulated failure analysis executor."""

from typing import Any

import structlog

from command_orchestrator.domain.entities.execution_result import ExecutionResult
from command_orchestrator.infrastructure.executors.simulated_executor import (
    SimulatedExecutor,
)

logger = structlog.get_logger(__name__)

ANALYSIS_SECONDS = 2.0


class SimulatedFailureAnalysisExecutor(SimulatedExecutor):
    """Reports a canned root-cause analysis for recent test failures."""

    async def execute(
        self, service_name: str, parameters: dict[str, Any]
    ) -> ExecutionResult:
        logger.info("failure_analysis_started", service=service_name)
        await self.simulate(ANALYSIS_SECONDS)

        failures = [
            {
                "test": f"{service_name}.timeoutOnSlowDependency",
                "category": "TIMEOUT",
                "rootCause": "Downstream dependency exceeded response budget",
            },
            {
                "test": f"{service_name}.staleTestData",
                "category": "DATA",
                "rootCause": "Fixture data out of sync with schema",
            },
        ]
        data: dict[str, Any] = {
            "service": service_name,
            "failures": failures,
            "count": len(failures),
            "recommendations": [
                "Increase client timeout or add a circuit breaker",
                "Regenerate fixtures from the current schema",
            ],
        }
        if "testType" in parameters:
            data["testType"] = parameters["testType"]

        return ExecutionResult.ok("Failure analysis completed", data)
