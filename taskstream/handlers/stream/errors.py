"""Establishment-time error responses (sent instead of opening the stream)."""

from __future__ import annotations

from fastapi import status
from fastapi.responses import ORJSONResponse

from taskstream.errors import InvalidCredential, MissingCredential, StreamCapacityError


def build_error_body(message: str) -> dict[str, str]:
    return {"error": message}


def reject_unauthenticated(exc: MissingCredential | InvalidCredential) -> ORJSONResponse:
    return ORJSONResponse(build_error_body(exc.message), status_code=status.HTTP_401_UNAUTHORIZED)


def reject_at_capacity(exc: StreamCapacityError) -> ORJSONResponse:
    return ORJSONResponse(build_error_body(exc.message), status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


__all__ = ["build_error_body", "reject_at_capacity", "reject_unauthenticated"]
