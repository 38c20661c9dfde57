"""Per-session keep-alive ticker."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class KeepAliveTicker:
    def __init__(
        self,
        tick: Callable[[], None],
        *,
        interval_s: float,
        is_live: Callable[[], bool] | None = None,
    ) -> None:
        self._tick = tick
        self._interval_s = float(interval_s)
        self._is_live = is_live or (lambda: True)
        self._task: asyncio.Task | None = None

    def start(self) -> asyncio.Task | None:
        if self._interval_s <= 0:
            return None
        if self._task is None:
            self._task = asyncio.create_task(self._loop())
        return self._task

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None

    async def _loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._interval_s)
                if not self._is_live():
                    break
                self._tick()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("keep-alive ticker exiting due to unexpected error", exc_info=True)


__all__ = ["KeepAliveTicker"]
