"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from taskstream.state.settings import AppSettings, AuthSettings, LimitsSettings, StreamSettings
from taskstream.config.limits import ENV_MAX_CONCURRENT_STREAMS, DEFAULT_MAX_CONCURRENT_STREAMS
from taskstream.config.auth import (
    ENV_AUTH_JWT_SECRET,
    ENV_AUTH_JWT_ISSUER,
    ENV_AUTH_JWT_AUDIENCE,
    ENV_AUTH_JWT_ALGORITHMS,
    ENV_AUTH_TOKEN_QUERY_PARAM,
    DEFAULT_AUTH_JWT_ALGORITHMS,
    ENV_AUTH_SESSION_COOKIE_NAME,
    DEFAULT_AUTH_TOKEN_QUERY_PARAM,
    DEFAULT_AUTH_SESSION_COOKIE_NAME,
)
from taskstream.config.stream import (
    ENV_STREAM_DEBOUNCE_MS,
    ENV_STREAM_KEEPALIVE_S,
    DEFAULT_STREAM_DEBOUNCE_MS,
    DEFAULT_STREAM_KEEPALIVE_S,
    ENV_STREAM_ALLOWED_ORIGINS,
    ENV_STREAM_OUTBOUND_QUEUE_MAX,
    DEFAULT_STREAM_ALLOWED_ORIGINS,
    DEFAULT_STREAM_OUTBOUND_QUEUE_MAX,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _optional_str_env(name: str) -> str | None:
    raw = (os.getenv(name) or "").strip()
    return raw or None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def _load_auth_settings() -> AuthSettings:
    return AuthSettings(
        jwt_secret=(os.getenv(ENV_AUTH_JWT_SECRET) or "").strip(),
        jwt_algorithms=_list_env(ENV_AUTH_JWT_ALGORITHMS, DEFAULT_AUTH_JWT_ALGORITHMS),
        jwt_audience=_optional_str_env(ENV_AUTH_JWT_AUDIENCE),
        jwt_issuer=_optional_str_env(ENV_AUTH_JWT_ISSUER),
        token_query_param=_str_env(ENV_AUTH_TOKEN_QUERY_PARAM, DEFAULT_AUTH_TOKEN_QUERY_PARAM),
        session_cookie_name=_str_env(ENV_AUTH_SESSION_COOKIE_NAME, DEFAULT_AUTH_SESSION_COOKIE_NAME),
    )


def _load_stream_settings() -> StreamSettings:
    debounce_ms = _positive(_int_env(ENV_STREAM_DEBOUNCE_MS, DEFAULT_STREAM_DEBOUNCE_MS), DEFAULT_STREAM_DEBOUNCE_MS)
    keepalive_s = _positive(_float_env(ENV_STREAM_KEEPALIVE_S, DEFAULT_STREAM_KEEPALIVE_S), DEFAULT_STREAM_KEEPALIVE_S)
    queue_max = _positive(
        _int_env(ENV_STREAM_OUTBOUND_QUEUE_MAX, DEFAULT_STREAM_OUTBOUND_QUEUE_MAX),
        DEFAULT_STREAM_OUTBOUND_QUEUE_MAX,
    )
    origins = _list_env(ENV_STREAM_ALLOWED_ORIGINS, DEFAULT_STREAM_ALLOWED_ORIGINS)

    return StreamSettings(
        debounce_s=debounce_ms / 1000.0,
        keepalive_s=float(keepalive_s),
        outbound_queue_max=int(queue_max),
        allowed_origins=frozenset(origins),
    )


def _load_limits_settings() -> LimitsSettings:
    max_streams = _int_env(ENV_MAX_CONCURRENT_STREAMS, DEFAULT_MAX_CONCURRENT_STREAMS)
    return LimitsSettings(max_concurrent_streams=int(_positive(max_streams, DEFAULT_MAX_CONCURRENT_STREAMS)))


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        stream=_load_stream_settings(),
        limits=_load_limits_settings(),
    )


__all__ = ["load_settings"]
