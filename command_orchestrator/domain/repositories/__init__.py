"""Repository interfaces - Abstract collaborator contracts."""

from command_orchestrator.domain.repositories.action_executor import (
    ActionExecutorInterface,
)
from command_orchestrator.domain.repositories.command_parser import (
    CommandParserInterface,
)

__all__ = [
    "CommandParserInterface",
    "ActionExecutorInterface",
]
