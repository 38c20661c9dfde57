"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_algorithms: tuple[str, ...]
    jwt_audience: str | None
    jwt_issuer: str | None
    token_query_param: str
    session_cookie_name: str


@dataclass(frozen=True, slots=True)
class StreamSettings:
    debounce_s: float
    keepalive_s: float
    outbound_queue_max: int
    allowed_origins: frozenset[str]


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_streams: int


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    stream: StreamSettings
    limits: LimitsSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "LimitsSettings",
    "StreamSettings",
]
