from .memory import InMemoryWatchSource
from .predicate import WatchPredicate, owner_equals, assignee_contains
from .source import WatchEvent, WatchCancel, WatchCallback, ChangeWatchSource

__all__ = [
    "ChangeWatchSource",
    "InMemoryWatchSource",
    "WatchCallback",
    "WatchCancel",
    "WatchEvent",
    "WatchPredicate",
    "assignee_contains",
    "owner_equals",
]
