"""Credential and verified identity value types."""

from __future__ import annotations

from typing import Literal
from dataclasses import dataclass

CredentialKind = Literal["token", "session_cookie"]


@dataclass(frozen=True, slots=True)
class Credential:
    kind: CredentialKind
    value: str

    def __repr__(self) -> str:
        # Never log raw credentials.
        return f"Credential(kind={self.kind!r}, value=<{len(self.value)} chars>)"


@dataclass(frozen=True, slots=True)
class VerifiedIdentity:
    uid: str
    email: str | None = None
    name: str | None = None


__all__ = ["Credential", "CredentialKind", "VerifiedIdentity"]
