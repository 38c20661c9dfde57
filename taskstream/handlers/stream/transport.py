"""Bounded outbound frame queue between a session and its HTTP response."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from taskstream.errors import TransportWriteFailure


class QueueTransport:
    """Frames written by the session, drained by the streaming response body.

    ``send`` never blocks: a full queue means the client is not keeping up and
    is reported as a write failure.
    """

    def __init__(self, *, max_frames: int) -> None:
        # One extra slot so the close sentinel always fits.
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=max(1, int(max_frames)) + 1)
        self._max_frames = max(1, int(max_frames))
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, frame: str) -> None:
        if self._closed:
            raise TransportWriteFailure(reason="transport closed")
        if self._queue.qsize() >= self._max_frames:
            raise TransportWriteFailure(reason="outbound queue full")
        self._queue.put_nowait(frame)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Undelivered frames are dropped; the sentinel wakes the reader.
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    async def frames(self) -> AsyncIterator[str]:
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame


__all__ = ["QueueTransport"]
