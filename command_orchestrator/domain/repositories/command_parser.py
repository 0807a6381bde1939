"""Interface for natural-language command parsing.

This interface abstracts the parser (keyword matching, an LLM, etc.) so the
context analyzer stays independent of how intents are extracted.
"""

from abc import ABC, abstractmethod

from command_orchestrator.domain.entities.command import ParsedCommand


class CommandParserInterface(ABC):
    """Interface for turning raw command text into a ParsedCommand."""

    @abstractmethod
    def parse(self, command: str) -> ParsedCommand:
        """Parse a raw operational command.

        Args:
            command: Raw command text (e.g. "run chaos tests on order-service")

        Returns:
            ParsedCommand with candidate intents, services, test types and
            parameters. Implementations must not default missing values;
            defaulting is the analyzer's job.
        """
        pass
