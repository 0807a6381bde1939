"""Use case for executing analyzed commands.

Runs the steps of a ComprehensiveContext's execution plan:
1. Register the execution and its cancellation token
2. Run steps in parallel (bounded, barrier join) or sequentially
   (halting after a failed critical step)
3. Bound every step by its deadline
4. Aggregate step results into a single ExecutionResult
"""

import asyncio
import logging
import time
from dataclasses import replace
from typing import Any
from uuid import uuid4

from command_orchestrator.application.dtos.execution_summary_dto import (
    ExecutionSummaryDTO,
    StepResultDTO,
)
from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.comprehensive_context import (
    ComprehensiveContext,
)
from command_orchestrator.domain.entities.execution_plan import (
    ExecutionStep,
    ExecutionStrategy,
    StepStatus,
)
from command_orchestrator.domain.entities.execution_result import (
    ExecutionResult,
    ExecutionStatus,
)
from command_orchestrator.domain.services.action_dispatcher import ActionDispatcher
from command_orchestrator.domain.services.cancellation import CancellationToken
from command_orchestrator.domain.services.duration_estimator import (
    parse_duration_seconds,
)
from command_orchestrator.infrastructure.observability.logging import (
    execution_log_context,
)
from command_orchestrator.infrastructure.observability.metrics import (
    record_plan_execution,
    record_step_execution,
    record_step_timeout,
    set_active_executions,
)
from command_orchestrator.infrastructure.observability.tracing import get_tracer
from command_orchestrator.infrastructure.stores.in_memory_execution_store import (
    InMemoryExecutionStore,
)

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

DEFAULT_STEP_TIMEOUT_SECONDS = 300.0
DEFAULT_MAX_PARALLEL_STEPS = 8


class ExecutionOrchestrator:
    """Execute plans and single actions, with status tracking and cancellation.

    No public method raises for execution problems: failures are reported as
    failed ExecutionResults.
    """

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        execution_store: InMemoryExecutionStore,
        default_step_timeout: float = DEFAULT_STEP_TIMEOUT_SECONDS,
        max_parallel_steps: int = DEFAULT_MAX_PARALLEL_STEPS,
    ):
        self._dispatcher = dispatcher
        self._store = execution_store
        self._default_step_timeout = default_step_timeout
        self._max_parallel_steps = max_parallel_steps
        self._tokens: dict[str, CancellationToken] = {}
        self._background_tasks: dict[str, asyncio.Task] = {}

    async def execute_actions(
        self, context: ComprehensiveContext, execution_id: str | None = None
    ) -> ExecutionResult:
        """Execute every step of the context's plan and wait for the outcome.

        Args:
            context: Analyzed command
            execution_id: Identifier to track the execution under (generated
                when omitted)

        Returns:
            Aggregated ExecutionResult whose data is the execution summary
        """
        execution_id = execution_id or str(uuid4())
        try:
            token = self._begin(execution_id, context)
        except ValueError as e:
            logger.error(f"Cannot start execution {execution_id}: {e}")
            return ExecutionResult.failure(f"Execution failed: {e}")
        return await self._run(execution_id, context, token)

    async def submit_actions(self, context: ComprehensiveContext) -> str:
        """Start executing the plan in the background.

        Returns:
            Execution id usable with get_execution_status(), cancel_execution()
            and wait_for_execution()
        """
        execution_id = str(uuid4())
        token = self._begin(execution_id, context)
        task = asyncio.create_task(self._run(execution_id, context, token))
        self._background_tasks[execution_id] = task
        task.add_done_callback(
            lambda _: self._background_tasks.pop(execution_id, None)
        )
        logger.info(f"Submitted execution {execution_id} for: {context.command}")
        return execution_id

    async def wait_for_execution(self, execution_id: str) -> ExecutionResult | None:
        """Wait for a submitted execution and return its final result.

        Returns:
            The final result, or None if the execution is unknown
        """
        task = self._background_tasks.get(execution_id)
        if task is not None:
            await asyncio.shield(task)
        record = self._store.get_record(execution_id)
        return record.result if record is not None else None

    async def execute_action(
        self,
        action_type: ActionType | str,
        service_name: str,
        test_type: TestType | str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        """Execute a single action against a service.

        Returns:
            The executor's result; unknown actions and executor errors are
            reported as failed results
        """
        return await self._dispatcher.dispatch(
            action_type, service_name, test_type, parameters or {}
        )

    def get_active_executions(self) -> dict[str, ExecutionResult]:
        """Snapshot of in-flight executions keyed by execution id."""
        return self._store.active_snapshot()

    def get_execution_status(self, execution_id: str) -> ExecutionStatus | None:
        return self._store.get_status(execution_id)

    def cancel_execution(self, execution_id: str) -> bool:
        """Cancel an in-flight execution.

        Removes the execution from the active set and signals its token:
        sequential plans stop before their next step and outstanding parallel
        steps are cancelled.

        Returns:
            True if an in-flight execution was cancelled, False otherwise
        """
        if not self._store.cancel(execution_id):
            logger.info(f"Cancel requested for unknown execution {execution_id}")
            return False

        token = self._tokens.get(execution_id)
        if token is not None:
            token.cancel()
        set_active_executions(len(self._store.active_snapshot()))
        logger.info(f"Execution {execution_id} cancelled")
        return True

    def _begin(
        self, execution_id: str, context: ComprehensiveContext
    ) -> CancellationToken:
        self._store.register(execution_id, context.command)
        token = CancellationToken()
        token.bind(asyncio.get_running_loop())
        self._tokens[execution_id] = token
        set_active_executions(len(self._store.active_snapshot()))
        return token

    async def _run(
        self,
        execution_id: str,
        context: ComprehensiveContext,
        token: CancellationToken,
    ) -> ExecutionResult:
        plan = context.execution_plan
        strategy = plan.execution_strategy
        start = time.perf_counter()
        status = ExecutionStatus.FAILED

        with execution_log_context(execution_id=execution_id):
            logger.info(
                f"Executing {len(plan.steps)} steps ({strategy.value}) for command: "
                f"{context.command}"
            )
            try:
                with tracer.start_as_current_span("execute_plan") as span:
                    span.set_attribute("execution.id", execution_id)
                    span.set_attribute("execution.strategy", strategy.value)
                    span.set_attribute("execution.steps", len(plan.steps))

                    self._store.mark_running(execution_id)
                    # Work on copies so a context can be executed more than once
                    steps = [
                        replace(s, parameters=dict(s.parameters), status=StepStatus.PENDING)
                        for s in plan.steps
                    ]

                    halted_at: str | None = None
                    if strategy == ExecutionStrategy.PARALLEL:
                        step_results = await self._run_parallel(steps, token)
                    else:
                        step_results, halted_at = await self._run_sequential(
                            steps, token
                        )

                    summary = ExecutionSummaryDTO(
                        execution_id=execution_id,
                        original_command=context.command,
                        execution_strategy=strategy.value,
                        estimated_duration=context.estimated_duration,
                        actual_duration=f"{time.perf_counter() - start:.2f} seconds",
                        step_results=step_results,
                        halted=halted_at is not None,
                        halted_at_step=halted_at,
                        cancelled=token.cancelled,
                    )
                    result = self._compile_result(summary)
                    if token.cancelled:
                        status = ExecutionStatus.CANCELLED
                    elif result.success:
                        status = ExecutionStatus.COMPLETED
                    span.set_attribute("execution.status", status.value)
            except asyncio.CancelledError:
                status = ExecutionStatus.CANCELLED
                self._finish(
                    execution_id,
                    ExecutionResult.failure(
                        "Execution cancelled", {"executionId": execution_id}
                    ),
                    status,
                    strategy,
                    start,
                )
                raise
            except Exception as e:
                logger.error(f"Error executing actions: {e}", exc_info=True)
                result = ExecutionResult.failure(
                    f"Execution failed: {e}", {"executionId": execution_id}
                )

            self._finish(execution_id, result, status, strategy, start)
            logger.info(f"Execution {execution_id} finished: {result.message}")
            return result

    def _finish(
        self,
        execution_id: str,
        result: ExecutionResult,
        status: ExecutionStatus,
        strategy: ExecutionStrategy,
        start: float,
    ) -> None:
        self._store.complete(execution_id, result, status)
        self._tokens.pop(execution_id, None)
        set_active_executions(len(self._store.active_snapshot()))
        record_plan_execution(
            strategy=strategy.value,
            status=status.value,
            duration=time.perf_counter() - start,
        )

    async def _run_sequential(
        self, steps: list[ExecutionStep], token: CancellationToken
    ) -> tuple[list[StepResultDTO], str | None]:
        results: list[StepResultDTO] = []
        for step in steps:
            if token.cancelled:
                logger.info(f"Execution cancelled before step: {step.step_name}")
                break

            step_result = await self._execute_step(step)
            results.append(step_result)

            if not step_result.success and step.is_critical:
                logger.error(f"Critical step failed: {step.step_name}")
                return results, step.step_id
        return results, None

    async def _run_parallel(
        self, steps: list[ExecutionStep], token: CancellationToken
    ) -> list[StepResultDTO]:
        semaphore = asyncio.Semaphore(self._max_parallel_steps)

        async def run_bounded(step: ExecutionStep) -> StepResultDTO:
            async with semaphore:
                return await self._execute_step(step)

        tasks = [asyncio.create_task(run_bounded(step)) for step in steps]
        if not tasks:
            return []

        all_steps = asyncio.gather(*tasks, return_exceptions=True)
        cancel_waiter = asyncio.create_task(token.wait())
        try:
            await asyncio.wait(
                {all_steps, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED
            )
            if not all_steps.done():
                logger.info("Execution cancelled, stopping outstanding parallel steps")
                for task in tasks:
                    task.cancel()
            # Barrier: every step has finished or been cancelled
            await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise
        finally:
            cancel_waiter.cancel()

        results: list[StepResultDTO] = []
        for step, task in zip(steps, tasks):
            if task.cancelled():
                results.append(self._cancelled_step(step))
            elif task.exception() is not None:
                error = task.exception()
                self._set_status(step, StepStatus.RUNNING)
                self._set_status(step, StepStatus.FAILED)
                results.append(
                    self._step_result(
                        step,
                        ExecutionResult.failure(f"Action execution failed: {error}"),
                        0.0,
                    )
                )
            else:
                results.append(task.result())
        return results

    async def _execute_step(self, step: ExecutionStep) -> StepResultDTO:
        timeout = parse_duration_seconds(
            step.parameters.get("timeout"), self._default_step_timeout
        )
        logger.info(f"Executing step: {step.step_name}")
        self._set_status(step, StepStatus.RUNNING)
        start = time.perf_counter()

        with tracer.start_as_current_span("execute_step") as span:
            span.set_attribute("step.id", step.step_id)
            span.set_attribute("step.action_type", step.action_type.value)
            span.set_attribute("step.service", step.service_name)
            try:
                result = await asyncio.wait_for(
                    self.execute_action(
                        step.action_type,
                        step.service_name,
                        step.test_type,
                        step.parameters,
                    ),
                    timeout=timeout,
                )
            except asyncio.TimeoutError:
                logger.warning(f"Step {step.step_id} timed out after {timeout:g}s")
                record_step_timeout(step.action_type.value)
                result = ExecutionResult.failure(f"Step timed out after {timeout:g}s")
            span.set_attribute("step.success", result.success)

        duration = time.perf_counter() - start
        self._set_status(
            step, StepStatus.COMPLETED if result.success else StepStatus.FAILED
        )
        record_step_execution(step.action_type.value, step.status.value, duration)
        return self._step_result(step, result, duration)

    def _cancelled_step(self, step: ExecutionStep) -> StepResultDTO:
        self._set_status(step, StepStatus.CANCELLED)
        record_step_execution(step.action_type.value, step.status.value, 0.0)
        return self._step_result(step, ExecutionResult.failure("Step cancelled"), 0.0)

    @staticmethod
    def _set_status(step: ExecutionStep, status: StepStatus) -> None:
        if step.status != status:
            step.transition_to(status)

    @staticmethod
    def _step_result(
        step: ExecutionStep, result: ExecutionResult, duration: float
    ) -> StepResultDTO:
        return StepResultDTO(
            step_id=step.step_id,
            step_name=step.step_name,
            action_type=step.action_type.value,
            service_name=step.service_name,
            test_type=step.test_type.value if step.test_type else None,
            status=step.status.value,
            success=result.success,
            message=result.message,
            data=dict(result.data),
            duration_seconds=duration,
        )

    @staticmethod
    def _compile_result(summary: ExecutionSummaryDTO) -> ExecutionResult:
        verb = "cancelled" if summary.cancelled else "completed"
        message = (
            f"Execution {verb}: {summary.successful_steps}/{summary.total_steps} "
            f"steps successful"
        )
        success = summary.all_succeeded and not summary.cancelled
        return ExecutionResult(success=success, message=message, data=summary.to_dict())
