"""Base class for executors that simulate work instead of calling a runner."""

import asyncio

from command_orchestrator.domain.repositories.action_executor import (
    ActionExecutorInterface,
)
from command_orchestrator.infrastructure.config.settings import get_settings


class SimulatedExecutor(ActionExecutorInterface):
    """Executor that sleeps for a nominal duration before reporting a result.

    Attributes:
        delay_scale: Multiplier for nominal delays (0 skips sleeping)
    """

    def __init__(self, delay_scale: float | None = None) -> None:
        if delay_scale is None:
            delay_scale = get_settings().executor.simulated_delay_scale
        self.delay_scale = delay_scale

    async def simulate(self, nominal_seconds: float) -> None:
        """Sleep for the scaled delay; cancellation propagates to the caller."""
        delay = nominal_seconds * self.delay_scale
        if delay > 0:
            await asyncio.sleep(delay)
