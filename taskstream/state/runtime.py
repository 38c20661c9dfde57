"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from taskstream.state.settings import AppSettings
    from taskstream.watch.source import ChangeWatchSource
    from taskstream.identity.verifier import IdentityVerifier
    from taskstream.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    verifier: IdentityVerifier
    watch_source: ChangeWatchSource
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            closed = await self.connections.close_all()
        except Exception:
            logger.exception("runtime shutdown failed")
            return
        if closed:
            logger.info("runtime: closed %s open stream(s)", closed)


__all__ = ["RuntimeDeps"]
