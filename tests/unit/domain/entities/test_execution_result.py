"""Unit tests for execution result entities."""

import dataclasses

import pytest

from command_orchestrator.domain.entities.execution_result import (
    ExecutionResult,
    ExecutionStatus,
)


class TestExecutionResult:
    """Test cases for ExecutionResult."""

    def test_ok_factory(self):
        """Test successful result construction."""
        result = ExecutionResult.ok("done", {"count": 1})

        assert result.success is True
        assert result.message == "done"
        assert result.data["count"] == 1
        assert result.timestamp.tzinfo is not None

    def test_failure_factory_has_empty_data(self):
        """Test failed result construction without data."""
        result = ExecutionResult.failure("boom")

        assert result.success is False
        assert dict(result.data) == {}

    def test_result_is_immutable(self):
        """Test that fields and data cannot be mutated."""
        result = ExecutionResult.ok("done", {"count": 1})

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.success = False  # type: ignore[misc]
        with pytest.raises(TypeError):
            result.data["count"] = 2  # type: ignore[index]

    def test_data_is_copied(self):
        """Test that later changes to the source dict do not leak in."""
        source = {"count": 1}
        result = ExecutionResult.ok("done", source)
        source["count"] = 99

        assert result.data["count"] == 1

    def test_to_dict(self):
        """Test plain-dict rendering."""
        payload = ExecutionResult.ok("done", {"a": 1}).to_dict()

        assert payload["success"] is True
        assert payload["message"] == "done"
        assert payload["data"] == {"a": 1}
        assert "timestamp" in payload


class TestExecutionStatus:
    """Test cases for ExecutionStatus."""

    @pytest.mark.parametrize(
        "status,terminal",
        [
            (ExecutionStatus.PENDING, False),
            (ExecutionStatus.RUNNING, False),
            (ExecutionStatus.COMPLETED, True),
            (ExecutionStatus.FAILED, True),
            (ExecutionStatus.CANCELLED, True),
        ],
    )
    def test_is_terminal(self, status, terminal):
        """Test which statuses end an execution."""
        assert status.is_terminal is terminal
