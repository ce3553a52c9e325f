from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Collapses bursts of calls into one callback after `delay` seconds.

    Owns a single timer handle: schedule() cancels the pending timer (if
    any) and re-arms it. Must be used from inside a running event loop.
    """

    def __init__(self, delay: float = 0.25):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], Any]) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def wait(self) -> None:
        """
        Await the callback started by the last fired timer, if any.
        """
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    def _fire(self, callback: Callable[[], Any]) -> None:
        self._handle = None
        try:
            result = callback()
        except Exception:
            logger.exception("Debounced callback failed")
            return

        if inspect.isawaitable(result):
            self._task = asyncio.ensure_future(result)
            self._task.add_done_callback(self._log_task_error)

    @staticmethod
    def _log_task_error(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed: %s", exc, exc_info=exc)
