"""JWT-backed identity verifier for query tokens and session cookies."""

from __future__ import annotations

import logging
from typing import Any

import jwt

from taskstream.errors import InvalidCredential
from taskstream.state.settings import AuthSettings

from .credential import Credential, VerifiedIdentity

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ["exp", "sub"]


class JwtIdentityVerifier:
    """Verify signed JWTs with a shared secret.

    Query tokens and session cookies use the same signing key. Session cookies
    can additionally be revoked server-side by reissuing them with
    ``"revoked": true``.
    """

    def __init__(
        self,
        *,
        secret: str,
        algorithms: tuple[str, ...] = ("HS256",),
        audience: str | None = None,
        issuer: str | None = None,
    ) -> None:
        self._secret = secret
        self._algorithms = list(algorithms)
        self._audience = audience
        self._issuer = issuer

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> JwtIdentityVerifier:
        return cls(
            secret=settings.jwt_secret,
            algorithms=settings.jwt_algorithms,
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )

    def _decode(self, value: str) -> dict[str, Any]:
        options: dict[str, Any] = {"require": _REQUIRED_CLAIMS, "verify_aud": self._audience is not None}
        return jwt.decode(
            value,
            self._secret,
            algorithms=self._algorithms,
            audience=self._audience,
            issuer=self._issuer,
            options=options,
        )

    async def verify(self, credential: Credential) -> VerifiedIdentity:
        if not self._secret:
            # Misconfiguration: server has no secret set. Treat as locked down.
            raise InvalidCredential(reason="verifier has no secret configured")

        try:
            claims = self._decode(credential.value)
        except jwt.ExpiredSignatureError as exc:
            raise InvalidCredential(reason="expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidCredential(reason=type(exc).__name__) from exc

        uid = claims.get("sub")
        if not isinstance(uid, str) or not uid.strip():
            raise InvalidCredential(reason="empty subject")
        if credential.kind == "session_cookie" and claims.get("revoked") is True:
            raise InvalidCredential(reason="revoked")

        email = claims.get("email")
        name = claims.get("name")
        return VerifiedIdentity(
            uid=uid.strip(),
            email=email if isinstance(email, str) else None,
            name=name if isinstance(name, str) else None,
        )


__all__ = ["JwtIdentityVerifier"]
