"""Stream admission control and live-session registry."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from taskstream.handlers.stream.session import StreamSession


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: dict[str, StreamSession] = {}

    @property
    def limit(self) -> int:
        return self._max

    async def connect(self, session: StreamSession) -> bool:
        """Attempt to admit a session (before any stream header is sent)."""
        async with self._lock:
            if len(self._active) >= self._max:
                return False
            self._active[session.session_id] = session
            return True

    async def disconnect(self, session: StreamSession) -> bool:
        async with self._lock:
            return self._active.pop(session.session_id, None) is not None

    async def close_all(self) -> int:
        async with self._lock:
            sessions = list(self._active.values())
            self._active.clear()
        for session in sessions:
            try:
                session.close()
            except Exception:
                logger.exception("failed to close session_id=%s", session.session_id)
        return len(sessions)

    def get_connection_count(self) -> int:
        return len(self._active)


__all__ = ["ConnectionManager"]
