"""Execution result entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ExecutionStatus(str, Enum):
    """Lifecycle of a top-level execution request."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ExecutionStatus.COMPLETED,
            ExecutionStatus.FAILED,
            ExecutionStatus.CANCELLED,
        )


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of an executor call or of a whole plan execution.

    Results are never mutated after creation; data is exposed read-only.

    Attributes:
        success: Whether the execution succeeded
        message: Human-readable outcome
        data: Opaque payload
        timestamp: When the result was produced (UTC)
    """

    success: bool
    message: str
    data: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def ok(cls, message: str, data: Mapping[str, Any] | None = None) -> "ExecutionResult":
        return cls(success=True, message=message, data=data or {})

    @classmethod
    def failure(
        cls, message: str, data: Mapping[str, Any] | None = None
    ) -> "ExecutionResult":
        return cls(success=False, message=message, data=data or {})

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view for transport layers and summaries."""
        return {
            "success": self.success,
            "message": self.message,
            "data": dict(self.data),
            "timestamp": self.timestamp.isoformat(),
        }
