from __future__ import annotations

import asyncio

import pytest
from starlette.requests import Request
from fastapi.responses import StreamingResponse

from taskstream.watch import InMemoryWatchSource, owner_equals
from taskstream.runtime.dependencies import build_runtime_deps
from taskstream.handlers.stream.manager import handle_stream_request
from tests.utils import StaticVerifier, make_settings
from tests.utils.settings import ALLOWED_ORIGIN


def _request(query: str = "", headers: dict[str, str] | None = None) -> Request:
    raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/todos/stream",
        "raw_path": b"/todos/stream",
        "query_string": query.encode("latin-1"),
        "headers": raw_headers,
        "client": ("127.0.0.1", 50000),
        "server": ("testserver", 80),
    }
    return Request(scope)


def _deps(source: InMemoryWatchSource, **settings_kwargs):
    return build_runtime_deps(
        make_settings(**settings_kwargs),
        verifier=StaticVerifier({"good-token": "alice", "cookie-value": "bob"}),
        watch_source=source,
    )


async def _next_frame(response: StreamingResponse, timeout: float = 1.0) -> str:
    return await asyncio.wait_for(response.body_iterator.__anext__(), timeout=timeout)


@pytest.mark.asyncio
async def test_stream_sends_ready_then_debounced_change() -> None:
    source = InMemoryWatchSource()
    deps = _deps(source)
    response = await handle_stream_request(_request("token=good-token", {"Origin": ALLOWED_ORIGIN}), deps)

    assert isinstance(response, StreamingResponse)
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["cache-control"] == "no-cache, no-transform"
    assert response.headers["connection"] == "keep-alive"
    assert response.headers["x-accel-buffering"] == "no"
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert response.headers["vary"] == "Origin"

    assert await _next_frame(response) == 'event: ready\ndata: {"ok":true}\n\n'
    assert source.subscription_count == 2
    assert deps.connections.get_connection_count() == 1

    source.fire(owner_equals("alice"))
    source.put("t1", {"ownerUid": "alice", "assigneeUids": ["alice"]})
    frame = await _next_frame(response)
    assert frame.startswith('event: todos_changed\ndata: {"at":')

    await response.body_iterator.aclose()
    assert source.subscription_count == 0
    assert deps.connections.get_connection_count() == 0


@pytest.mark.asyncio
async def test_session_cookie_opens_stream_without_cors_for_unlisted_origin() -> None:
    source = InMemoryWatchSource()
    deps = _deps(source)
    request = _request(headers={"Cookie": "__session=cookie-value", "Origin": "https://evil.example.com"})
    response = await handle_stream_request(request, deps)

    assert "access-control-allow-origin" not in response.headers
    assert "vary" not in response.headers
    assert await _next_frame(response) == 'event: ready\ndata: {"ok":true}\n\n'
    await response.body_iterator.aclose()


@pytest.mark.asyncio
async def test_cancelled_body_tears_the_session_down() -> None:
    source = InMemoryWatchSource()
    deps = _deps(source, keepalive_s=0.02)
    response = await handle_stream_request(_request("token=good-token"), deps)

    frames: list[str] = []

    async def consume() -> None:
        async for frame in response.body_iterator:
            frames.append(frame)

    task = asyncio.create_task(consume())
    await asyncio.sleep(0.07)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert frames[0].startswith("event: ready\n")
    assert any(f.startswith(": keep-alive ") for f in frames)
    assert source.subscription_count == 0
    assert deps.connections.get_connection_count() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("query", "message"),
    [("", "Missing session"), ("token=", "Missing session"), ("token=bad", "Invalid or expired token")],
)
async def test_rejected_establishment_never_opens_a_stream(query: str, message: str) -> None:
    source = InMemoryWatchSource()
    deps = _deps(source)
    response = await handle_stream_request(_request(query), deps)

    assert not isinstance(response, StreamingResponse)
    assert response.status_code == 401
    assert response.body == ('{"error":"%s"}' % message).encode()
    assert source.subscription_count == 0
    assert deps.connections.get_connection_count() == 0


@pytest.mark.asyncio
async def test_over_capacity_is_refused_after_auth() -> None:
    source = InMemoryWatchSource()
    deps = _deps(source, max_concurrent_streams=1)
    first = await handle_stream_request(_request("token=good-token"), deps)
    assert await _next_frame(first) == 'event: ready\ndata: {"ok":true}\n\n'

    second = await handle_stream_request(_request("token=good-token"), deps)
    assert second.status_code == 503
    assert source.subscription_count == 2

    await first.body_iterator.aclose()
    assert source.subscription_count == 0


@pytest.mark.asyncio
async def test_disconnect_before_body_starts_releases_the_slot() -> None:
    source = InMemoryWatchSource()
    deps = _deps(source, max_concurrent_streams=1)
    response = await handle_stream_request(_request("token=good-token"), deps)
    assert deps.connections.get_connection_count() == 1

    sent: list[dict] = []

    async def receive() -> dict:
        return {"type": "http.disconnect"}

    async def send(message: dict) -> None:
        await asyncio.sleep(0)
        sent.append(message)

    # Older ASGI servers get the disconnect listener racing the body.
    await response({"type": "http", "asgi": {"spec_version": "2.3"}}, receive, send)

    assert not any(b"event: ready" in m.get("body", b"") for m in sent)
    assert source.subscription_count == 0
    assert deps.connections.get_connection_count() == 0

    retry = await handle_stream_request(_request("token=good-token"), deps)
    assert isinstance(retry, StreamingResponse)
    assert await _next_frame(retry) == 'event: ready\ndata: {"ok":true}\n\n'
    await retry.body_iterator.aclose()
    assert deps.connections.get_connection_count() == 0
