"""SSE frame formatting and establishment parameter parsing."""

from __future__ import annotations

from typing import Any
from collections.abc import Mapping

import orjson

from taskstream.identity import Credential
from taskstream.state.settings import AuthSettings
from taskstream.config.stream import STREAM_KEEPALIVE_COMMENT


def format_event(name: str, data: Any) -> str:
    payload = orjson.dumps(data).decode("utf-8")
    return f"event: {name}\ndata: {payload}\n\n"


def format_comment(text: str) -> str:
    # A line starting with ':' is ignored by conforming EventSource parsers.
    return f": {text}\n\n"


def format_keepalive(at_ms: int) -> str:
    return format_comment(f"{STREAM_KEEPALIVE_COMMENT} {at_ms}")


def _clean(raw: str | None) -> str:
    return (raw or "").strip()


def extract_credential(
    query: Mapping[str, str],
    cookies: Mapping[str, str],
    settings: AuthSettings,
) -> Credential | None:
    # Query param is easiest for EventSource clients, which cannot set headers.
    token = _clean(query.get(settings.token_query_param))
    if token:
        return Credential(kind="token", value=token)
    cookie = _clean(cookies.get(settings.session_cookie_name))
    if cookie:
        return Credential(kind="session_cookie", value=cookie)
    return None


__all__ = ["extract_credential", "format_comment", "format_event", "format_keepalive"]
