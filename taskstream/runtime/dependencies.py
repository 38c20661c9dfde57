"""Runtime dependency construction (identity verifier, watch source, admission control)."""

from __future__ import annotations

import logging

from taskstream.state import RuntimeDeps
from taskstream.state.settings import AppSettings
from taskstream.identity import IdentityVerifier, JwtIdentityVerifier
from taskstream.watch import ChangeWatchSource, InMemoryWatchSource
from taskstream.handlers.connections import ConnectionManager

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    verifier: IdentityVerifier | None = None,
    watch_source: ChangeWatchSource | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()

    if verifier is None:
        if not settings.auth.jwt_secret:
            logger.warning("AUTH_JWT_SECRET is not set; every stream will be rejected")
        verifier = JwtIdentityVerifier.from_settings(settings.auth)

    if watch_source is None:
        logger.info("runtime: using in-memory change watch source")
        watch_source = InMemoryWatchSource()

    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_streams)

    return RuntimeDeps(
        connections=connections,
        verifier=verifier,
        watch_source=watch_source,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
