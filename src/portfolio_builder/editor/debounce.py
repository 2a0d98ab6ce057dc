"""Trailing-edge debounce on the asyncio event loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Run ``action`` once, ``delay`` seconds after the last ``trigger()`` call.

    There is at most one pending timer: each trigger cancels it and schedules a
    new one. Once the timer fires the action runs as its own task and is not
    cancelled by later triggers.
    """

    def __init__(
        self,
        name: str,
        delay: float,
        action: Callable[[], Awaitable[None] | None],
    ) -> None:
        self.name = name
        self.delay = delay
        self._action = action
        self._timer: asyncio.TimerHandle | None = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is scheduled and has not fired yet."""
        return self._timer is not None

    def trigger(self) -> None:
        """Cancel any pending timer and schedule the action after ``delay``."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._timer = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending timer, if any, without running the action."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def flush(self) -> None:
        """Run the pending action now, if one is scheduled, and wait for it."""
        if self._timer is None:
            return
        self.cancel()
        await self._run()

    async def wait_idle(self) -> None:
        """Wait for actions that already fired to finish."""
        if self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    def _fire(self) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self._run())
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _run(self) -> None:
        logger.debug("Debounced action fired - name=%s", self.name)
        try:
            result = self._action()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Debounced action failed - name=%s", self.name)
