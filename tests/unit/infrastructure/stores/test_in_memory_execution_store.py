"""Unit tests for InMemoryExecutionStore."""

import pytest

from command_orchestrator.domain.entities.execution_result import (
    ExecutionResult,
    ExecutionStatus,
)
from command_orchestrator.infrastructure.stores.in_memory_execution_store import (
    InMemoryExecutionStore,
)


class TestInMemoryExecutionStore:
    """Test cases for execution tracking."""

    @pytest.fixture
    def store(self):
        """Store keeping at most two finished executions."""
        return InMemoryExecutionStore(max_tracked=2)

    def test_register_starts_pending(self, store):
        """Test that new executions are active and PENDING."""
        store.register("exec-1", "run unit tests")

        assert store.get_status("exec-1") == ExecutionStatus.PENDING
        assert "exec-1" in store.active_snapshot()

    def test_register_duplicate_rejected(self, store):
        """Test that ids cannot be reused, even after finishing."""
        store.register("exec-1", "run unit tests")
        with pytest.raises(ValueError, match="already registered"):
            store.register("exec-1", "run unit tests")

        store.complete("exec-1", ExecutionResult.ok("done"), ExecutionStatus.COMPLETED)
        with pytest.raises(ValueError, match="already registered"):
            store.register("exec-1", "run unit tests")

    def test_invalid_capacity_rejected(self):
        """Test that the history must hold at least one execution."""
        with pytest.raises(ValueError, match="max_tracked must be >= 1"):
            InMemoryExecutionStore(max_tracked=0)

    def test_mark_running(self, store):
        """Test the PENDING to RUNNING transition."""
        store.register("exec-1", "run unit tests")

        assert store.mark_running("exec-1") is True
        assert store.get_status("exec-1") == ExecutionStatus.RUNNING
        assert store.mark_running("missing") is False

    def test_active_snapshot_is_provisional(self, store):
        """Test the in-flight result view."""
        store.register("exec-1", "run unit tests")
        store.mark_running("exec-1")

        snapshot = store.active_snapshot()["exec-1"]

        assert snapshot.success is False
        assert snapshot.message == "Execution running"
        assert snapshot.data["status"] == "RUNNING"
        assert snapshot.data["originalCommand"] == "run unit tests"
        assert "startedAt" in snapshot.data

    def test_complete_moves_to_history(self, store):
        """Test that completed executions leave the active set."""
        result = ExecutionResult.ok("Execution completed: 1/1 steps successful")
        store.register("exec-1", "run unit tests")

        store.complete("exec-1", result, ExecutionStatus.COMPLETED)

        record = store.get_record("exec-1")
        assert store.active_snapshot() == {}
        assert record.status == ExecutionStatus.COMPLETED
        assert record.result is result
        assert record.finished_at is not None

    def test_cancel(self, store):
        """Test that cancelling removes an execution from the active set."""
        store.register("exec-1", "run unit tests")

        assert store.cancel("exec-1") is True
        assert store.get_status("exec-1") == ExecutionStatus.CANCELLED
        assert store.active_snapshot() == {}
        assert store.cancel("exec-1") is False
        assert store.cancel("missing") is False

    def test_complete_keeps_cancelled_status(self, store):
        """Test that a late result does not overwrite CANCELLED."""
        store.register("exec-1", "run unit tests")
        store.cancel("exec-1")

        store.complete(
            "exec-1", ExecutionResult.failure("Execution cancelled"), ExecutionStatus.FAILED
        )

        record = store.get_record("exec-1")
        assert record.status == ExecutionStatus.CANCELLED
        assert record.result.message == "Execution cancelled"

    def test_complete_unknown_is_ignored(self, store):
        """Test that completing an untracked id is a no-op."""
        store.complete("missing", ExecutionResult.ok("done"), ExecutionStatus.COMPLETED)

        assert store.get_status("missing") is None

    def test_history_is_bounded(self, store):
        """Test that the oldest finished executions are evicted."""
        for execution_id in ("exec-1", "exec-2", "exec-3"):
            store.register(execution_id, "run unit tests")
            store.complete(
                execution_id, ExecutionResult.ok("done"), ExecutionStatus.COMPLETED
            )

        assert store.get_status("exec-1") is None
        assert store.get_status("exec-2") == ExecutionStatus.COMPLETED
        assert store.get_status("exec-3") == ExecutionStatus.COMPLETED

    def test_get_record_returns_copy(self, store):
        """Test that callers cannot mutate stored records."""
        store.register("exec-1", "run unit tests")

        record = store.get_record("exec-1")
        record.status = ExecutionStatus.FAILED

        assert store.get_status("exec-1") == ExecutionStatus.PENDING
        assert store.get_record("missing") is None

    def test_clear(self, store):
        """Test that clear drops active and finished executions."""
        store.register("exec-1", "run unit tests")
        store.register("exec-2", "run unit tests")
        store.cancel("exec-2")

        store.clear()

        assert store.get_status("exec-1") is None
        assert store.get_status("exec-2") is None
