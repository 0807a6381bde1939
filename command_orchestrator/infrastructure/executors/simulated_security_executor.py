"""Simulated security scan executor."""

from typing import Any

import structlog

from command_orchestrator.domain.entities.execution_result import ExecutionResult
from command_orchestrator.infrastructure.executors.simulated_executor import (
    SimulatedExecutor,
)

logger = structlog.get_logger(__name__)

SCAN_SECONDS = 7.0


class SimulatedSecurityExecutor(SimulatedExecutor):
    """Simulates a vulnerability scan.

    Parameters read: scanType (default "vulnerability_scan") and scanDepth
    (default "comprehensive").
    """

    async def execute(
        self, service_name: str, parameters: dict[str, Any]
    ) -> ExecutionResult:
        scan_type = parameters.get("scanType", "vulnerability_scan")
        scan_depth = parameters.get("scanDepth", "comprehensive")

        logger.info(
            "security_scan_started",
            service=service_name,
            scan_type=scan_type,
            scan_depth=scan_depth,
        )
        await self.simulate(SCAN_SECONDS)

        return ExecutionResult.ok(
            "Security test executed successfully",
            {
                "service": service_name,
                "testType": parameters.get("testType", "SECURITY_TEST"),
                "scanType": scan_type,
                "scanDepth": scan_depth,
                "vulnerabilitiesFound": 3,
                "criticalVulnerabilities": 0,
                "highVulnerabilities": 1,
                "mediumVulnerabilities": 2,
                "lowVulnerabilities": 0,
                "securityScore": "B+",
                "complianceStatus": "COMPLIANT",
                "recommendations": [
                    "Add input validation",
                    "Rotate service credentials",
                    "Tighten CORS policy",
                ],
            },
        )
