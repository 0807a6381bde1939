"""Use cases - Application-specific workflows.

Command analysis produces a ComprehensiveContext; orchestration executes it.
"""

from command_orchestrator.application.use_cases.analyze_command import (
    AnalyzeCommandUseCase,
)
from command_orchestrator.application.use_cases.orchestrate_execution import (
    ExecutionOrchestrator,
)

__all__ = [
    "AnalyzeCommandUseCase",
    "ExecutionOrchestrator",
]
