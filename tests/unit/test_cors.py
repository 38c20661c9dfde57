from __future__ import annotations

import pytest

from taskstream.handlers.stream.cors import cors_headers
from taskstream.config.stream import DEFAULT_STREAM_ALLOWED_ORIGINS


def test_allow_listed_origin_is_echoed_exactly() -> None:
    origin = DEFAULT_STREAM_ALLOWED_ORIGINS[1]
    headers = cors_headers(origin, DEFAULT_STREAM_ALLOWED_ORIGINS)
    assert headers == {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}


@pytest.mark.parametrize(
    "origin",
    [None, "", "https://evil.example.com", "https://collab-todo-66eb2.web.app.evil.com", "*"],
)
def test_unlisted_or_missing_origin_gets_no_headers(origin: str | None) -> None:
    assert cors_headers(origin, DEFAULT_STREAM_ALLOWED_ORIGINS) == {}
