"""In-process document collection with predicate-filtered change watches."""

from __future__ import annotations

import logging
import itertools
from typing import Any
from collections.abc import Callable

from .predicate import WatchPredicate
from .source import WatchEvent, WatchCancel, WatchCallback

logger = logging.getLogger(__name__)


class InMemoryWatchSource:
    """A ``todos`` collection held in memory.

    Writes notify every subscription whose predicate matched the document
    before or after the write, so a task leaving a user's view is reported
    just like one entering it. ``fire`` and ``fail`` deliver directly to
    matching subscriptions without touching any document.
    """

    def __init__(self) -> None:
        self._docs: dict[str, dict[str, Any]] = {}
        self._subs: dict[int, tuple[WatchPredicate, WatchCallback]] = {}
        self._ids = itertools.count(1)

    @property
    def subscription_count(self) -> int:
        return len(self._subs)

    def subscribe(self, predicate: WatchPredicate, on_event: WatchCallback) -> WatchCancel:
        sub_id = next(self._ids)
        self._subs[sub_id] = (predicate, on_event)
        logger.debug("watch subscribed id=%s predicate=%s", sub_id, predicate)

        def cancel() -> None:
            if self._subs.pop(sub_id, None) is not None:
                logger.debug("watch cancelled id=%s", sub_id)

        return cancel

    def get(self, doc_id: str) -> dict[str, Any] | None:
        doc = self._docs.get(doc_id)
        return dict(doc) if doc is not None else None

    def put(self, doc_id: str, doc: dict[str, Any]) -> int:
        before = self._docs.get(doc_id)
        self._docs[doc_id] = dict(doc)
        return self._notify_write(before, doc)

    def delete(self, doc_id: str) -> int:
        before = self._docs.pop(doc_id, None)
        if before is None:
            return 0
        return self._notify_write(before, None)

    def fire(self, predicate: WatchPredicate) -> int:
        return self._deliver(lambda p: p == predicate, error=None)

    def fail(self, predicate: WatchPredicate, error: BaseException) -> int:
        return self._deliver(lambda p: p == predicate, error=error)

    def _notify_write(self, before: dict[str, Any] | None, after: dict[str, Any] | None) -> int:
        return self._deliver(lambda p: p.matches(before) or p.matches(after), error=None)

    def _deliver(self, select: Callable[[WatchPredicate], bool], *, error: BaseException | None) -> int:
        # Snapshot: callbacks may cancel subscriptions while we iterate.
        targets = [(sub_id, p, cb) for sub_id, (p, cb) in self._subs.items() if select(p)]
        delivered = 0
        for sub_id, predicate, callback in targets:
            if sub_id not in self._subs:
                continue
            delivered += 1
            try:
                callback(WatchEvent(predicate=predicate, error=error))
            except Exception:
                logger.exception("watch callback failed predicate=%s", predicate)
        return delivered


__all__ = ["InMemoryWatchSource"]
