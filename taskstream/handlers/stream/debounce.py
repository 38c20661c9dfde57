"""Trailing-edge debounce with a single pending timer slot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class DebouncedNotifier:
    """Coalesce bursts of ``schedule()`` calls into one ``emit()``.

    Every call re-arms the timer for the full window, so a burst of N calls
    fires once, ``window_s`` after the last call. ``is_live`` is checked when
    the timer fires, not when it is armed.
    """

    def __init__(
        self,
        emit: Callable[[], None],
        *,
        window_s: float,
        is_live: Callable[[], bool] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._emit = emit
        self._window_s = max(0.0, float(window_s))
        self._is_live = is_live or (lambda: True)
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._window_s, self._fire)

    def cancel(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._is_live():
            logger.debug("debounce fired after close; dropping emission")
            return
        self._emit()


__all__ = ["DebouncedNotifier"]
