"""Domain service that builds execution plans.

One step is created for every (action x service x test type) combination,
nested in that order, so the plan is deterministic for a given input.
Execution parameters taken from the command (timeout, retries, priority,
environment) override the step defaults.
"""

import logging
from typing import Any, Mapping

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.dependency_graph import DependencyGraph
from command_orchestrator.domain.entities.execution_plan import (
    ExecutionPlan,
    ExecutionStep,
    ExecutionStrategy,
    build_step_id,
)
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.services.duration_estimator import (
    DEFAULT_STEP_MINUTES,
    format_duration,
)

logger = logging.getLogger(__name__)

DEFAULT_STEP_TIMEOUT = "300s"
DEFAULT_STEP_RETRIES = 2

# Step identity keys are never taken from command parameters
_STEP_IDENTITY_KEYS = frozenset({"action", "service", "testType"})


class ExecutionPlanBuilder:
    """Builds an ExecutionPlan from resolved command elements."""

    def __init__(self, registry: ContextRegistry):
        self._registry = registry

    def build(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
        dependency_graph: DependencyGraph,
        parameters: Mapping[str, Any] | None = None,
    ) -> ExecutionPlan:
        """Create the plan.

        Args:
            test_types: Resolved test types
            services: Resolved service names
            actions: Resolved actions
            dependency_graph: Dependency analysis used for step dependencies
            parameters: Command parameters merged over the step defaults

        Returns:
            ExecutionPlan whose strategy is PARALLEL only when every test type
            with a registry entry is parallelizable and the command did not
            ask for sequential execution
        """
        overrides = {
            key: value
            for key, value in (parameters or {}).items()
            if key not in _STEP_IDENTITY_KEYS
        }
        steps = [
            self._build_step(action, service, test_type, dependency_graph, overrides)
            for action in actions
            for service in services
            for test_type in test_types
        ]
        total_minutes = sum(step.estimated_minutes for step in steps)
        strategy = self.determine_strategy(test_types)
        if overrides.get("parallel") is False:
            strategy = ExecutionStrategy.SEQUENTIAL

        logger.debug(
            f"Built execution plan with {len(steps)} steps, strategy={strategy.value}, "
            f"estimated {total_minutes} minutes"
        )
        return ExecutionPlan(
            steps=steps,
            execution_order="SEQUENTIAL",
            execution_strategy=strategy,
            estimated_duration=format_duration(total_minutes),
            estimated_minutes=total_minutes,
        )

    def determine_strategy(self, test_types: list[TestType]) -> ExecutionStrategy:
        if self.all_parallelizable(test_types):
            return ExecutionStrategy.PARALLEL
        return ExecutionStrategy.SEQUENTIAL

    def all_parallelizable(self, test_types: list[TestType]) -> bool:
        """True when every test type with a registry entry is parallelizable.

        Test types without a registry entry are ignored, so an empty or
        entirely unknown list counts as parallelizable.
        """
        contexts = (self._registry.test_type(t) for t in test_types)
        return all(ctx.parallelizable for ctx in contexts if ctx is not None)

    def _build_step(
        self,
        action: ActionType,
        service: str,
        test_type: TestType,
        dependency_graph: DependencyGraph,
        overrides: Mapping[str, Any],
    ) -> ExecutionStep:
        context = self._registry.test_type(test_type)
        if context is not None:
            estimated_duration = context.execution_time.label
            estimated_minutes = context.execution_time.max_minutes
        else:
            estimated_duration = f"{DEFAULT_STEP_MINUTES} minutes"
            estimated_minutes = DEFAULT_STEP_MINUTES

        return ExecutionStep(
            step_id=build_step_id(action, service, test_type),
            step_name=f"{action.value} {test_type.display_name} for {service}",
            action_type=action,
            service_name=service,
            test_type=test_type,
            parameters={
                "action": action.value,
                "service": service,
                "testType": test_type.value,
                "timeout": DEFAULT_STEP_TIMEOUT,
                "retries": DEFAULT_STEP_RETRIES,
                **overrides,
            },
            dependencies=dependency_graph.dependencies_of(service),
            estimated_duration=estimated_duration,
            estimated_minutes=estimated_minutes,
        )
