"""Stream session states."""

from __future__ import annotations

from typing import Literal

SessionState = Literal["unauthenticated", "authenticating", "active", "closed"]

SESSION_UNAUTHENTICATED: SessionState = "unauthenticated"
SESSION_AUTHENTICATING: SessionState = "authenticating"
SESSION_ACTIVE: SessionState = "active"
SESSION_CLOSED: SessionState = "closed"

__all__ = [
    "SESSION_ACTIVE",
    "SESSION_AUTHENTICATING",
    "SESSION_CLOSED",
    "SESSION_UNAUTHENTICATED",
    "SessionState",
]
