"""Cooperative cancellation for running executions."""

import asyncio


class CancellationToken:
    """Per-request cancellation signal.

    The orchestrator checks the token between sequential steps and waits on
    it alongside parallel steps. cancel() may be called from any thread.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._cancelled = False
        self._loop: asyncio.AbstractEventLoop | None = None

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach the token to the loop that runs the execution."""
        self._loop = loop

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        loop = self._loop
        if loop is None or loop.is_closed():
            self._event.set()
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            self._event.set()
        else:
            loop.call_soon_threadsafe(self._event.set)

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()
