"""In-memory registry of plan executions.

Tracks in-flight executions and a bounded history of finished ones. Data is
cleared on restart; there is no durable queue behind it. All access goes
through a single lock so the store can be shared between the event loop and
other threads.
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from command_orchestrator.domain.entities.execution_result import (
    ExecutionResult,
    ExecutionStatus,
)

DEFAULT_MAX_TRACKED_EXECUTIONS = 100


@dataclass
class ExecutionRecord:
    """Bookkeeping entry for one execution request."""

    execution_id: str
    command: str
    status: ExecutionStatus
    started_at: datetime
    finished_at: datetime | None = None
    result: ExecutionResult | None = None

    def snapshot(self) -> ExecutionResult:
        """Result view of the record; provisional while still in flight."""
        if self.result is not None:
            return self.result
        return ExecutionResult(
            success=False,
            message=f"Execution {self.status.value.lower()}",
            data={
                "executionId": self.execution_id,
                "status": self.status.value,
                "originalCommand": self.command,
                "startedAt": self.started_at.isoformat(),
            },
        )


class InMemoryExecutionStore:
    """Thread-safe registry of active and recently finished executions."""

    def __init__(self, max_tracked: int = DEFAULT_MAX_TRACKED_EXECUTIONS):
        if max_tracked < 1:
            raise ValueError(f"max_tracked must be >= 1, got: {max_tracked}")
        self._max_tracked = max_tracked
        self._lock = threading.Lock()
        self._active: dict[str, ExecutionRecord] = {}
        self._finished: OrderedDict[str, ExecutionRecord] = OrderedDict()

    def register(self, execution_id: str, command: str) -> None:
        """Add a new PENDING execution.

        Args:
            execution_id: Unique execution identifier
            command: Original command text

        Raises:
            ValueError: If the identifier is already tracked
        """
        with self._lock:
            if execution_id in self._active or execution_id in self._finished:
                raise ValueError(f"Execution already registered: {execution_id}")
            self._active[execution_id] = ExecutionRecord(
                execution_id=execution_id,
                command=command,
                status=ExecutionStatus.PENDING,
                started_at=datetime.now(timezone.utc),
            )

    def mark_running(self, execution_id: str) -> bool:
        """Move a PENDING execution to RUNNING.

        Returns:
            True if the execution is active and now RUNNING, False otherwise
        """
        with self._lock:
            record = self._active.get(execution_id)
            if record is None:
                return False
            record.status = ExecutionStatus.RUNNING
            return True

    def complete(
        self, execution_id: str, result: ExecutionResult, status: ExecutionStatus
    ) -> None:
        """Record the final result of an execution.

        An execution that was cancelled keeps its CANCELLED status; only the
        result is attached.
        """
        with self._lock:
            record = self._active.pop(execution_id, None)
            if record is None:
                record = self._finished.pop(execution_id, None)
            if record is None:
                return
            if record.status != ExecutionStatus.CANCELLED:
                record.status = status
            record.result = result
            record.finished_at = record.finished_at or datetime.now(timezone.utc)
            self._remember(record)

    def cancel(self, execution_id: str) -> bool:
        """Remove an in-flight execution and mark it CANCELLED.

        Returns:
            True if an active execution was cancelled, False if the id is
            unknown or already finished
        """
        with self._lock:
            record = self._active.pop(execution_id, None)
            if record is None:
                return False
            record.status = ExecutionStatus.CANCELLED
            record.finished_at = datetime.now(timezone.utc)
            self._remember(record)
            return True

    def get_status(self, execution_id: str) -> ExecutionStatus | None:
        with self._lock:
            record = self._active.get(execution_id) or self._finished.get(execution_id)
            return record.status if record is not None else None

    def get_record(self, execution_id: str) -> ExecutionRecord | None:
        """Copy of the record for an execution, None if not tracked."""
        with self._lock:
            record = self._active.get(execution_id) or self._finished.get(execution_id)
            return replace(record) if record is not None else None

    def active_snapshot(self) -> dict[str, ExecutionResult]:
        """Provisional results of every in-flight execution, keyed by id."""
        with self._lock:
            return {eid: record.snapshot() for eid, record in self._active.items()}

    def clear(self) -> None:
        with self._lock:
            self._active.clear()
            self._finished.clear()

    def _remember(self, record: ExecutionRecord) -> None:
        # Caller holds the lock
        self._finished[record.execution_id] = record
        while len(self._finished) > self._max_tracked:
            self._finished.popitem(last=False)
