"""DTOs for plan execution summaries."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StepResultDTO:
    """Outcome of a single plan step."""

    step_id: str
    step_name: str
    action_type: str
    service_name: str
    test_type: str | None
    status: str  # "COMPLETED" | "FAILED" | "CANCELLED"
    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "stepId": self.step_id,
            "stepName": self.step_name,
            "actionType": self.action_type,
            "serviceName": self.service_name,
            "testType": self.test_type,
            "status": self.status,
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "durationSeconds": self.duration_seconds,
        }


@dataclass
class ExecutionSummaryDTO:
    """Aggregated outcome of a plan execution.

    Carried as the data payload of the top-level ExecutionResult.
    """

    execution_id: str
    original_command: str
    execution_strategy: str
    estimated_duration: str
    actual_duration: str = "0.00 seconds"
    step_results: list[StepResultDTO] = field(default_factory=list)
    halted: bool = False
    halted_at_step: str | None = None
    cancelled: bool = False

    @property
    def total_steps(self) -> int:
        return len(self.step_results)

    @property
    def successful_steps(self) -> int:
        return sum(1 for r in self.step_results if r.success)

    @property
    def failed_steps(self) -> int:
        return self.total_steps - self.successful_steps

    @property
    def success_rate(self) -> float:
        if not self.step_results:
            return 0.0
        return self.successful_steps / self.total_steps

    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.step_results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "executionId": self.execution_id,
            "totalSteps": self.total_steps,
            "successfulSteps": self.successful_steps,
            "failedSteps": self.failed_steps,
            "successRate": self.success_rate,
            "originalCommand": self.original_command,
            "executionStrategy": self.execution_strategy,
            "estimatedDuration": self.estimated_duration,
            "actualDuration": self.actual_duration,
            "halted": self.halted,
            "haltedAtStep": self.halted_at_step,
            "cancelled": self.cancelled,
            "stepResults": [r.to_dict() for r in self.step_results],
        }
