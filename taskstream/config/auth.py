"""Credential and verification configuration."""

from __future__ import annotations

ENV_AUTH_JWT_SECRET = "AUTH_JWT_SECRET"
ENV_AUTH_JWT_ALGORITHMS = "AUTH_JWT_ALGORITHMS"
ENV_AUTH_JWT_AUDIENCE = "AUTH_JWT_AUDIENCE"
ENV_AUTH_JWT_ISSUER = "AUTH_JWT_ISSUER"
ENV_AUTH_TOKEN_QUERY_PARAM = "AUTH_TOKEN_QUERY_PARAM"
ENV_AUTH_SESSION_COOKIE_NAME = "AUTH_SESSION_COOKIE_NAME"

DEFAULT_AUTH_JWT_ALGORITHMS: tuple[str, ...] = ("HS256",)
DEFAULT_AUTH_TOKEN_QUERY_PARAM = "token"
# Firebase Hosting only forwards a cookie with this exact name.
DEFAULT_AUTH_SESSION_COOKIE_NAME = "__session"

# Client-visible rejection messages. Verification failures all share one message.
AUTH_ERROR_MISSING = "Missing session"
AUTH_ERROR_INVALID = "Invalid or expired token"

__all__ = [
    "AUTH_ERROR_INVALID",
    "AUTH_ERROR_MISSING",
    "DEFAULT_AUTH_JWT_ALGORITHMS",
    "DEFAULT_AUTH_SESSION_COOKIE_NAME",
    "DEFAULT_AUTH_TOKEN_QUERY_PARAM",
    "ENV_AUTH_JWT_ALGORITHMS",
    "ENV_AUTH_JWT_AUDIENCE",
    "ENV_AUTH_JWT_ISSUER",
    "ENV_AUTH_JWT_SECRET",
    "ENV_AUTH_SESSION_COOKIE_NAME",
    "ENV_AUTH_TOKEN_QUERY_PARAM",
]
