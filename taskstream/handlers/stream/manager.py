"""Primary SSE stream request handler orchestration."""

from __future__ import annotations

import logging
import contextlib
from collections.abc import AsyncIterator

from fastapi import Request, Response
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from taskstream.state import RuntimeDeps
from taskstream.state.session import SESSION_CLOSED
from taskstream.config.stream import STREAM_HEADERS, STREAM_MEDIA_TYPE
from taskstream.errors import InvalidCredential, MissingCredential, StreamCapacityError

from .cors import cors_headers
from .session import StreamSession
from .auth import authenticate_stream
from .transport import QueueTransport
from .errors import reject_at_capacity, reject_unauthenticated

logger = logging.getLogger(__name__)


def _create_session(runtime_deps: RuntimeDeps) -> tuple[StreamSession, QueueTransport]:
    stream_settings = runtime_deps.settings.stream
    transport = QueueTransport(max_frames=stream_settings.outbound_queue_max)
    session = StreamSession(
        transport,
        verifier=runtime_deps.verifier,
        watch_source=runtime_deps.watch_source,
        debounce_s=stream_settings.debounce_s,
        keepalive_s=stream_settings.keepalive_s,
    )
    return session, transport


async def _release_session(session: StreamSession, runtime_deps: RuntimeDeps) -> None:
    # Runs from the body's finally and again as the response background task; the
    # body never starts when the client disconnects before the headers are sent.
    session.close()
    released = False
    with contextlib.suppress(Exception):
        released = await runtime_deps.connections.disconnect(session)
    if released:
        logger.info(
            "Stream closed session_id=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.get_connection_count(),
        )


async def _stream_frames(
    session: StreamSession,
    transport: QueueTransport,
    runtime_deps: RuntimeDeps,
) -> AsyncIterator[str]:
    # Runs after the response headers have been sent, so `ready` is always the first frame.
    try:
        if session.state == SESSION_CLOSED:
            # Shut down between admission and the first body read.
            return
        session.activate()
        logger.info(
            "Stream opened session_id=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.get_connection_count(),
        )
        async for frame in transport.frames():
            yield frame
    finally:
        await _release_session(session, runtime_deps)


async def handle_stream_request(request: Request, runtime_deps: RuntimeDeps) -> Response:
    settings = runtime_deps.settings
    session, transport = _create_session(runtime_deps)

    try:
        await authenticate_stream(request, session, settings.auth)
    except (MissingCredential, InvalidCredential) as exc:
        return reject_unauthenticated(exc)

    if not await runtime_deps.connections.connect(session):
        session.close()
        exc = StreamCapacityError(
            active=runtime_deps.connections.get_connection_count(),
            limit=runtime_deps.connections.limit,
        )
        logger.warning("Stream refused: at capacity (%s/%s)", exc.active, exc.limit)
        return reject_at_capacity(exc)

    headers = dict(STREAM_HEADERS)
    headers.update(cors_headers(request.headers.get("origin"), settings.stream.allowed_origins))
    return StreamingResponse(
        _stream_frames(session, transport, runtime_deps),
        media_type=STREAM_MEDIA_TYPE,
        headers=headers,
        background=BackgroundTask(_release_session, session, runtime_deps),
    )


__all__ = ["handle_stream_request"]
