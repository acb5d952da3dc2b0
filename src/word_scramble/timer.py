"""Repeating countdown tick owned by the game engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Optional

logger = logging.getLogger(__name__)


class CountdownTimer:
    """
    Repeating one-task interval timer.

    The callback runs once per ``interval`` seconds and returns whether the
    timer should keep running. It must read the caller's current state when
    it fires rather than a snapshot taken at ``start()``. An exception from
    the callback is logged and stops the timer.

    ``start()`` and ``stop()`` are idempotent. The timer is an async context
    manager, so it is stopped on every exit path:

        async with CountdownTimer(engine.tick, interval=1.0) as timer:
            timer.start()
            ...
    """

    def __init__(self, on_tick: Callable[[], bool], interval: float = 1.0):
        """
        Initialize timer.

        Args:
            on_tick: Called each interval; return False to stop ticking
            interval: Seconds between ticks
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._on_tick = on_tick
        self.interval = interval
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking on the running event loop; no-op if already running."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Countdown timer started", extra={"interval": self.interval})

    def stop(self) -> None:
        """Cancel the tick task; safe to call when already stopped."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        # Stopping from inside the callback must not cancel the running tick
        if task is asyncio.current_task():
            return
        task.cancel()
        logger.debug("Countdown timer stopped")

    async def aclose(self) -> None:
        """Stop the timer and wait for the tick task to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        if task is not asyncio.current_task():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    async def _run(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval)
                keep_running = self._on_tick()
                # stop() called from the callback detaches this task
                if not keep_running or self._task is not asyncio.current_task():
                    break
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("Countdown tick failed", exc_info=e)
        finally:
            if self._task is asyncio.current_task():
                self._task = None

    async def __aenter__(self) -> "CountdownTimer":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
