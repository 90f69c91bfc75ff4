"""
Cancelable deferred callbacks.

A DeferredTask runs its callback once, ``delay`` seconds after start(),
unless cancel() gets there first. It lives on the running asyncio loop and
never blocks it.
"""

from __future__ import annotations
from typing import Any, Awaitable, Callable, Optional, Union
import asyncio
import inspect
import logging


logger = logging.getLogger(__name__)

Callback = Callable[[], Union[None, Awaitable[Any]]]


class DeferredTask:
    """
    Fire-or-cancel timer.

    Usage:
        task = DeferredTask(1.5, session.run_bot_turn, name="bot-1")
        task.start()
        ...
        task.cancel()   # no-op once fired
    """

    def __init__(self, delay: float, callback: Callback, name: str = "deferred"):
        self.delay = max(0.0, delay)
        self.callback = callback
        self.name = name
        self.fired = False
        self.cancelled = False
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self.fired and not self.cancelled

    def start(self) -> DeferredTask:
        """Schedule the callback on the running loop."""
        if self._task is not None:
            raise RuntimeError(f"DeferredTask {self.name} already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    def cancel(self) -> bool:
        """
        Cancel the callback if it has not fired.

        Returns:
            True if this call prevented the callback from running
        """
        if self.fired or self.cancelled:
            return False
        self.cancelled = True
        if self._task is not None:
            self._task.cancel()
        logger.debug(f"Cancelled {self.name}")
        return True

    async def _run(self) -> None:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            return
        if self.cancelled:
            return
        self.fired = True
        try:
            result = self.callback()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Deferred callback {self.name} failed")

    async def wait(self) -> None:
        """Wait until the task has fired or been cancelled."""
        if self._task is None:
            return
        await asyncio.wait({self._task})

    def __repr__(self) -> str:
        state = "fired" if self.fired else "cancelled" if self.cancelled else "pending"
        return f"DeferredTask({self.name}, {self.delay}s, {state})"
