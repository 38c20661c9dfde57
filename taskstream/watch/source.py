"""Change watch source collaborator interface."""

from __future__ import annotations

from typing import Protocol
from dataclasses import dataclass
from collections.abc import Callable

from .predicate import WatchPredicate


@dataclass(frozen=True, slots=True)
class WatchEvent:
    """One delivery from a watch subscription.

    Carries no payload beyond "something matching the predicate may have
    changed". ``error`` is set when the source reports a failure instead.
    """

    predicate: WatchPredicate
    error: BaseException | None = None


WatchCallback = Callable[[WatchEvent], None]
WatchCancel = Callable[[], None]


class ChangeWatchSource(Protocol):
    def subscribe(self, predicate: WatchPredicate, on_event: WatchCallback) -> WatchCancel:
        """Register ``on_event`` for changes matching ``predicate``.

        Callbacks run on the event loop thread. The returned handle cancels the
        subscription and is safe to call more than once.
        """
        ...


__all__ = ["ChangeWatchSource", "WatchCallback", "WatchCancel", "WatchEvent"]
