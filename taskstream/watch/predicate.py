"""Document predicates understood by change watch sources."""

from __future__ import annotations

from typing import Any, Literal
from dataclasses import dataclass

PredicateOp = Literal["==", "array-contains"]

OWNER_FIELD = "ownerUid"
ASSIGNEES_FIELD = "assigneeUids"


@dataclass(frozen=True, slots=True)
class WatchPredicate:
    field: str
    op: PredicateOp
    value: Any

    def matches(self, doc: dict[str, Any] | None) -> bool:
        if not doc or self.field not in doc:
            return False
        current = doc[self.field]
        if self.op == "==":
            return current == self.value
        if isinstance(current, (list, tuple, set, frozenset)):
            return self.value in current
        return False

    def __str__(self) -> str:
        return f"{self.field} {self.op} {self.value!r}"


def owner_equals(uid: str) -> WatchPredicate:
    return WatchPredicate(field=OWNER_FIELD, op="==", value=uid)


def assignee_contains(uid: str) -> WatchPredicate:
    return WatchPredicate(field=ASSIGNEES_FIELD, op="array-contains", value=uid)


__all__ = [
    "ASSIGNEES_FIELD",
    "OWNER_FIELD",
    "PredicateOp",
    "WatchPredicate",
    "assignee_contains",
    "owner_equals",
]
