"""Shared error types for the task stream server."""

from __future__ import annotations

from dataclasses import dataclass

from taskstream.config.limits import STREAM_ERROR_AT_CAPACITY
from taskstream.config.auth import AUTH_ERROR_MISSING, AUTH_ERROR_INVALID


@dataclass(frozen=True, slots=True)
class MissingCredential(Exception):
    """Raised when neither a query token nor a session cookie was supplied."""

    message: str = AUTH_ERROR_MISSING


@dataclass(frozen=True, slots=True)
class InvalidCredential(Exception):
    """Raised when the identity verifier rejects a credential.

    ``reason`` is for server logs only; clients always see ``message``.
    """

    reason: str = "rejected"
    message: str = AUTH_ERROR_INVALID


@dataclass(frozen=True, slots=True)
class StreamCapacityError(Exception):
    """Raised when admission control refuses a new stream."""

    active: int
    limit: int
    message: str = STREAM_ERROR_AT_CAPACITY


@dataclass(frozen=True, slots=True)
class WatchDeliveryError(Exception):
    """An error reported by the change watch source for one subscription."""

    predicate: str
    cause: BaseException | None = None


@dataclass(frozen=True, slots=True)
class TransportWriteFailure(Exception):
    """Raised when an outbound frame cannot be handed to the client."""

    reason: str


__all__ = [
    "InvalidCredential",
    "MissingCredential",
    "StreamCapacityError",
    "TransportWriteFailure",
    "WatchDeliveryError",
]
