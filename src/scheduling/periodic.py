from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

Job = Callable[[], Union[None, Awaitable[None]]]


class PeriodicTask:
    """Runs `func` every `interval_s` seconds on the event loop until stopped.

    Failures are logged and the loop keeps going. `stop()` cancels the loop
    and waits for it, so the owner decides the task's lifetime.
    """

    def __init__(self, name: str, interval_s: float, func: Job, run_immediately: bool = False):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.name = name
        self.interval_s = interval_s
        self.func = func
        self.run_immediately = run_immediately
        self.runs = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run_once(self) -> None:
        try:
            result = self.func()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Periodic task {self.name} failed")
        finally:
            self.runs += 1

    async def _loop(self) -> None:
        logger.info(f"Periodic task {self.name} started (every {self.interval_s}s)")
        if self.run_immediately:
            await self._run_once()
        while True:
            await asyncio.sleep(self.interval_s)
            await self._run_once()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info(f"Periodic task {self.name} stopped")
