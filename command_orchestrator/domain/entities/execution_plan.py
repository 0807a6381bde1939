"""Execution plan entities.

An ExecutionPlan holds one ExecutionStep per (action x service x test type)
combination of a command, in plan order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from command_orchestrator.domain.entities.command import ActionType, TestType


class ExecutionStrategy(str, Enum):
    """How the steps of a plan are run."""

    PARALLEL = "PARALLEL"
    SEQUENTIAL = "SEQUENTIAL"


class StepStatus(str, Enum):
    """Lifecycle of a single step."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


_ALLOWED_TRANSITIONS = {
    StepStatus.PENDING: {StepStatus.RUNNING, StepStatus.CANCELLED},
    StepStatus.RUNNING: {StepStatus.COMPLETED, StepStatus.FAILED, StepStatus.CANCELLED},
    StepStatus.COMPLETED: set(),
    StepStatus.FAILED: set(),
    StepStatus.CANCELLED: set(),
}


def build_step_id(
    action_type: ActionType, service_name: str, test_type: TestType | None
) -> str:
    """Deterministic step identifier: ACTION_service_TESTTYPE."""
    suffix = test_type.value if test_type is not None else "NONE"
    return f"{action_type.value}_{service_name}_{suffix}"


@dataclass
class ExecutionStep:
    """A single unit of work in an execution plan.

    Attributes:
        step_id: Deterministic identifier built from action, service and test type
        step_name: Human-readable name
        action_type: Action to dispatch
        service_name: Target service
        test_type: Test type (None for actions that are not test runs)
        parameters: Parameters passed to the executor
        dependencies: External resources the step relies on
        estimated_duration: Registry execution time label (e.g. "5-15 minutes")
        estimated_minutes: Upper bound of the estimate, in minutes
        status: Current lifecycle status
    """

    step_id: str
    step_name: str
    action_type: ActionType
    service_name: str
    test_type: TestType | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    dependencies: list[str] = field(default_factory=list)
    estimated_duration: str = "5 minutes"
    estimated_minutes: int = 5
    status: StepStatus = StepStatus.PENDING

    def transition_to(self, status: StepStatus) -> None:
        """Move the step to a new status.

        Raises:
            ValueError: If the transition is not allowed
        """
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid step transition for {self.step_id}: "
                f"{self.status.value} -> {status.value}"
            )
        self.status = status

    @property
    def is_critical(self) -> bool:
        """Whether a failure of this step halts a sequential plan."""
        return (
            self.action_type in (ActionType.HEALTH_CHECK, ActionType.RUN_CHAOS_TESTS)
            or self.test_type == TestType.CHAOS_TEST
        )


@dataclass
class ExecutionPlan:
    """Ordered steps plus the strategy used to run them.

    Domain invariants:
    - step ids are unique within the plan

    Attributes:
        steps: Steps in plan order
        execution_order: Ordering label (metadata only)
        execution_strategy: PARALLEL or SEQUENTIAL
        estimated_duration: Formatted total of the step estimates
        estimated_minutes: Total of the step estimates, in minutes
    """

    steps: list[ExecutionStep] = field(default_factory=list)
    execution_order: str = "SEQUENTIAL"
    execution_strategy: ExecutionStrategy = ExecutionStrategy.SEQUENTIAL
    estimated_duration: str = "0 minutes"
    estimated_minutes: int = 0

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        step_ids = [step.step_id for step in self.steps]
        if len(step_ids) != len(set(step_ids)):
            raise ValueError("step ids must be unique within a plan")

    def get_step(self, step_id: str) -> ExecutionStep | None:
        return next((s for s in self.steps if s.step_id == step_id), None)
