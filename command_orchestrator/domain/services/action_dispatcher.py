"""Domain service that routes actions to executors.

Executors are registered per action type and per test type. RUN_TESTS is
routed on the step's test type; the RUN_*_TESTS family actions are routed to
the executor registered for their family test type unless an executor is
registered for the action itself.
"""

import logging
from typing import Any, Mapping

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.execution_result import ExecutionResult
from command_orchestrator.domain.repositories.action_executor import (
    ActionExecutorInterface,
)

logger = logging.getLogger(__name__)

_FAMILY_TEST_TYPES = {
    ActionType.RUN_INTEGRATION_TESTS: TestType.INTEGRATION_TEST,
    ActionType.RUN_PERFORMANCE_TESTS: TestType.PERFORMANCE_TEST,
    ActionType.RUN_SECURITY_TESTS: TestType.SECURITY_TEST,
    ActionType.RUN_CHAOS_TESTS: TestType.CHAOS_TEST,
}

# Actions acknowledged without an executor: (message, data flag)
_ACKNOWLEDGED_ACTIONS = {
    ActionType.GENERATE_TESTS: ("Test generation completed", "generated"),
    ActionType.OPTIMIZE_TESTS: ("Test optimization completed", "optimized"),
    ActionType.MONITOR_SYSTEM: ("System monitoring completed", "monitored"),
    ActionType.GENERATE_REPORT: ("Report generation completed", "reportGenerated"),
    ActionType.SELF_HEAL: ("Self-heal completed", "healed"),
    ActionType.SCALE_RESOURCES: ("Resource scaling completed", "scaled"),
}


class ActionDispatcher:
    """Looks up and invokes the executor for an action.

    dispatch() never raises: unknown actions, unsupported test types and
    executor exceptions all become failed ExecutionResults.
    """

    def __init__(
        self,
        test_type_executors: Mapping[TestType, ActionExecutorInterface] | None = None,
        action_executors: Mapping[ActionType, ActionExecutorInterface] | None = None,
    ):
        self._test_type_executors = dict(test_type_executors or {})
        self._action_executors = dict(action_executors or {})

    def register_test_type(
        self, test_type: TestType, executor: ActionExecutorInterface
    ) -> None:
        self._test_type_executors[test_type] = executor

    def register_action(
        self, action_type: ActionType, executor: ActionExecutorInterface
    ) -> None:
        self._action_executors[action_type] = executor

    def supports_test_type(self, test_type: TestType) -> bool:
        return test_type in self._test_type_executors

    async def close(self) -> None:
        """Close every registered executor once."""
        executors = {
            id(executor): executor
            for executor in (
                *self._test_type_executors.values(),
                *self._action_executors.values(),
            )
        }
        for executor in executors.values():
            await executor.close()
        logger.info(f"Closed {len(executors)} action executors")

    async def dispatch(
        self,
        action_type: ActionType | str,
        service_name: str,
        test_type: TestType | str | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> ExecutionResult:
        """Execute one action against one service.

        Args:
            action_type: Action to run (an ActionType or its name)
            service_name: Target service
            test_type: Test type, required for RUN_TESTS
            parameters: Parameters forwarded to the executor

        Returns:
            The executor's result, or a failed result describing why the
            action could not be run
        """
        params = dict(parameters or {})
        action = _coerce_action(action_type)
        if action is None or action == ActionType.UNKNOWN:
            raw = action_type.value if isinstance(action_type, ActionType) else action_type
            logger.warning(f"Unknown action type requested: {raw}")
            return ExecutionResult.failure(f"Unknown action type: {raw}")

        logger.info(
            f"Executing action: {action.value} for service: {service_name} "
            f"with test type: {_label(test_type)}"
        )
        try:
            executor = self._action_executors.get(action)
            if executor is not None:
                return await executor.execute(service_name, params)

            if action == ActionType.RUN_TESTS:
                return await self._run_tests(service_name, test_type, params)

            if action in _FAMILY_TEST_TYPES:
                return await self._run_tests(
                    service_name, _FAMILY_TEST_TYPES[action], params
                )

            if action in _ACKNOWLEDGED_ACTIONS:
                message, flag = _ACKNOWLEDGED_ACTIONS[action]
                data: dict[str, Any] = {"service": service_name, flag: True}
                if test_type is not None:
                    data["testType"] = _label(test_type)
                return ExecutionResult.ok(message, data)

            return ExecutionResult.failure(f"Unknown action type: {action.value}")
        except Exception as e:
            logger.error(
                f"Error executing action {action.value}: {e}", exc_info=True
            )
            return ExecutionResult.failure(f"Action execution failed: {e}")

    async def _run_tests(
        self,
        service_name: str,
        test_type: TestType | str | None,
        params: dict[str, Any],
    ) -> ExecutionResult:
        resolved = _coerce_test_type(test_type)
        executor = self._test_type_executors.get(resolved) if resolved else None
        if executor is None:
            return ExecutionResult.failure(f"Unsupported test type: {_label(test_type)}")

        params["testType"] = resolved.value
        return await executor.execute(service_name, params)


def _coerce_action(value: ActionType | str) -> ActionType | None:
    if isinstance(value, ActionType):
        return value
    try:
        return ActionType(value)
    except ValueError:
        return None


def _coerce_test_type(value: TestType | str | None) -> TestType | None:
    if value is None or isinstance(value, TestType):
        return value
    try:
        return TestType(value)
    except ValueError:
        return None


def _label(value: TestType | str | None) -> str:
    if isinstance(value, TestType):
        return value.value
    return str(value)
