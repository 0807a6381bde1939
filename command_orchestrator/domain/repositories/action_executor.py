"""Interface for action executors.

Executors perform the actual work of a plan step (running tests, injecting
chaos, polling health endpoints, ...). They are looked up by the action
dispatcher and always awaited.
"""

from abc import ABC, abstractmethod
from typing import Any

from command_orchestrator.domain.entities.execution_result import ExecutionResult


class ActionExecutorInterface(ABC):
    """Interface for executing a single action against a service."""

    @abstractmethod
    async def execute(
        self, service_name: str, parameters: dict[str, Any]
    ) -> ExecutionResult:
        """Execute the action against a service.

        Args:
            service_name: Business identifier of the target service
            parameters: Step parameters (action, service, testType, timeout, ...)

        Returns:
            ExecutionResult describing the outcome. Recoverable conditions
            (unreachable service, failing tests) are reported as failed
            results rather than raised.
        """
        pass

    async def close(self) -> None:
        """Release resources held by the executor (connections, clients).

        Executors without such resources keep this no-op.
        """
        pass
