"""Stream establishment authentication helpers."""

from __future__ import annotations

from fastapi import Request

from taskstream.state.settings import AuthSettings
from taskstream.identity import Credential, VerifiedIdentity

from .codec import extract_credential
from .session import StreamSession


def get_credential(request: Request, settings: AuthSettings) -> Credential | None:
    return extract_credential(request.query_params, request.cookies, settings)


async def authenticate_stream(request: Request, session: StreamSession, settings: AuthSettings) -> VerifiedIdentity:
    # Raises MissingCredential / InvalidCredential; the session is closed either way.
    return await session.authenticate(get_credential(request, settings))


__all__ = ["authenticate_stream", "get_credential"]
