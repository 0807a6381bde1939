"""Application layer DTOs.

Uses dataclasses (not Pydantic) per Clean Architecture principles.
"""

from command_orchestrator.application.dtos.execution_summary_dto import (
    ExecutionSummaryDTO,
    StepResultDTO,
)

__all__ = [
    "ExecutionSummaryDTO",
    "StepResultDTO",
]
