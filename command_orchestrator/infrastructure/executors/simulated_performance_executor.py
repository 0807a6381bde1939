"""Simulated load/stress test executor."""

from typing import Any

import structlog

from command_orchestrator.domain.entities.execution_result import ExecutionResult
from command_orchestrator.infrastructure.executors.simulated_executor import (
    SimulatedExecutor,
)

logger = structlog.get_logger(__name__)

RUN_SECONDS = 8.0


class SimulatedPerformanceExecutor(SimulatedExecutor):
    """Simulates a performance run and reports latency/throughput metrics.

    Parameters read: loadType (default "load"), concurrentUsers (default
    100), duration (default "5m") and loadPattern (default "ramp_up").
    """

    async def execute(
        self, service_name: str, parameters: dict[str, Any]
    ) -> ExecutionResult:
        load_type = parameters.get("loadType", "load")
        concurrent_users = parameters.get("concurrentUsers", 100)
        duration = parameters.get("duration", "5m")
        load_pattern = parameters.get("loadPattern", "ramp_up")

        logger.info(
            "performance_run_started",
            service=service_name,
            load_type=load_type,
            concurrent_users=concurrent_users,
            load_pattern=load_pattern,
        )
        await self.simulate(RUN_SECONDS)

        return ExecutionResult.ok(
            "Performance test executed successfully",
            {
                "service": service_name,
                "testType": parameters.get("testType", "PERFORMANCE_TEST"),
                "loadType": load_type,
                "concurrentUsers": concurrent_users,
                "duration": duration,
                "loadPattern": load_pattern,
                "avgResponseTime": "245ms",
                "p95ResponseTime": "890ms",
                "p99ResponseTime": "1.2s",
                "throughput": "450 req/s",
                "errorRate": "0.1%",
                "cpuUtilization": "65%",
                "memoryUtilization": "78%",
                "networkThroughput": "125 MB/s",
            },
        )
