"""One client's task-change stream: auth, watches, debounce, keep-alive, teardown."""

from __future__ import annotations

import time
import uuid
import logging
from collections.abc import Callable

from taskstream.watch import WatchEvent, WatchCancel, ChangeWatchSource, owner_equals, assignee_contains
from taskstream.identity import Credential, IdentityVerifier, VerifiedIdentity
from taskstream.config.stream import STREAM_EVENT_READY, STREAM_EVENT_TODOS_CHANGED
from taskstream.errors import InvalidCredential, MissingCredential, WatchDeliveryError, TransportWriteFailure
from taskstream.state.session import (
    SESSION_ACTIVE,
    SESSION_CLOSED,
    SESSION_AUTHENTICATING,
    SESSION_UNAUTHENTICATED,
    SessionState,
)

from .transport import QueueTransport
from .debounce import DebouncedNotifier
from .keepalive import KeepAliveTicker
from .codec import format_event, format_keepalive

logger = logging.getLogger(__name__)

NowMsFn = Callable[[], int]


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class StreamSession:
    """State machine for a single SSE connection.

    ``unauthenticated -> authenticating -> active -> closed``; ``closed`` is
    reachable from every state. Every write path checks for ``active`` at the
    moment it runs, because a timer or watch callback can already be queued on
    the loop when the client goes away.
    """

    def __init__(
        self,
        transport: QueueTransport,
        *,
        verifier: IdentityVerifier,
        watch_source: ChangeWatchSource,
        debounce_s: float,
        keepalive_s: float,
        now_ms: NowMsFn | None = None,
        session_id: str | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self._transport = transport
        self._verifier = verifier
        self._watch_source = watch_source
        self._now_ms = now_ms or _wall_clock_ms
        self._state: SessionState = SESSION_UNAUTHENTICATED
        self._identity: VerifiedIdentity | None = None
        self._subscriptions: list[WatchCancel] = []
        self._notifier = DebouncedNotifier(self._emit_changed, window_s=debounce_s, is_live=self._is_active)
        self._keepalive = KeepAliveTicker(self._send_keepalive, interval_s=keepalive_s, is_live=self._is_active)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def uid(self) -> str | None:
        return self._identity.uid if self._identity is not None else None

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def _is_active(self) -> bool:
        return self._state == SESSION_ACTIVE

    async def authenticate(self, credential: Credential | None) -> VerifiedIdentity:
        if self._state != SESSION_UNAUTHENTICATED:
            raise RuntimeError(f"cannot authenticate a session in state {self._state!r}")
        if credential is None:
            self._state = SESSION_CLOSED
            raise MissingCredential()

        self._state = SESSION_AUTHENTICATING
        try:
            identity = await self._verifier.verify(credential)
        except InvalidCredential as exc:
            self._state = SESSION_CLOSED
            logger.info("stream auth rejected session_id=%s kind=%s", self.session_id, credential.kind)
            logger.debug("stream auth rejection reason=%s", exc.reason)
            raise
        except Exception as exc:
            # Any verifier failure is reported like a bad credential.
            self._state = SESSION_CLOSED
            logger.warning("identity verifier failed session_id=%s", self.session_id, exc_info=True)
            raise InvalidCredential(reason="verifier error") from exc

        if self._state != SESSION_AUTHENTICATING:
            # Closed while verification was in flight.
            raise InvalidCredential(reason="session closed during verification")
        self._identity = identity
        return identity

    def activate(self) -> None:
        """Send ``ready``, open both watches and start the keep-alive."""
        if self._state != SESSION_AUTHENTICATING or self._identity is None:
            raise RuntimeError(f"cannot activate a session in state {self._state!r}")
        self._state = SESSION_ACTIVE
        if not self._send(format_event(STREAM_EVENT_READY, {"ok": True})):
            return

        uid = self._identity.uid
        for predicate in (owner_equals(uid), assignee_contains(uid)):
            self._subscriptions.append(self._watch_source.subscribe(predicate, self._on_watch_event))
        self._keepalive.start()
        logger.info("stream active session_id=%s uid=%s", self.session_id, uid)

    def _on_watch_event(self, event: WatchEvent) -> None:
        if not self._is_active():
            return
        if event.error is not None:
            err = WatchDeliveryError(predicate=str(event.predicate), cause=event.error)
            logger.warning(
                "watch delivery error session_id=%s predicate=%s: %r",
                self.session_id,
                err.predicate,
                err.cause,
            )
        self._notifier.schedule()

    def _emit_changed(self) -> None:
        self._send(format_event(STREAM_EVENT_TODOS_CHANGED, {"at": self._now_ms()}))

    def _send_keepalive(self) -> None:
        self._send(format_keepalive(self._now_ms()))

    def _send(self, frame: str) -> bool:
        if not self._is_active():
            return False
        try:
            self._transport.send(frame)
        except TransportWriteFailure as exc:
            logger.info("stream write failed session_id=%s: %s", self.session_id, exc.reason)
            self.close()
            return False
        return True

    def close(self) -> None:
        """Tear down every resource the session owns. Safe to call repeatedly."""
        if self._state == SESSION_CLOSED:
            return
        was_active = self._state == SESSION_ACTIVE
        self._state = SESSION_CLOSED
        self._notifier.cancel()
        self._keepalive.stop()

        subscriptions, self._subscriptions = self._subscriptions, []
        for cancel in subscriptions:
            try:
                cancel()
            except Exception:
                logger.exception("watch cancel failed session_id=%s", self.session_id)

        self._transport.close()
        if was_active:
            logger.info("stream closed session_id=%s uid=%s", self.session_id, self.uid)


__all__ = ["StreamSession"]
