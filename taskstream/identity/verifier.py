"""Identity verification collaborator interface."""

from __future__ import annotations

from typing import Protocol

from .credential import Credential, VerifiedIdentity


class IdentityVerifier(Protocol):
    async def verify(self, credential: Credential) -> VerifiedIdentity:
        """Return the identity behind ``credential`` or raise ``InvalidCredential``."""
        ...


__all__ = ["IdentityVerifier"]
