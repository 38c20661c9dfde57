"""SSE stream protocol configuration and constants."""

from __future__ import annotations

STREAM_ENDPOINT_PATH = "/todos/stream"

# Event names
STREAM_EVENT_READY = "ready"
STREAM_EVENT_TODOS_CHANGED = "todos_changed"
STREAM_KEEPALIVE_COMMENT = "keep-alive"

STREAM_MEDIA_TYPE = "text/event-stream"

STREAM_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

ENV_STREAM_DEBOUNCE_MS = "STREAM_DEBOUNCE_MS"
ENV_STREAM_KEEPALIVE_S = "STREAM_KEEPALIVE_S"
ENV_STREAM_OUTBOUND_QUEUE_MAX = "STREAM_OUTBOUND_QUEUE_MAX"
ENV_STREAM_ALLOWED_ORIGINS = "STREAM_ALLOWED_ORIGINS"

DEFAULT_STREAM_DEBOUNCE_MS = 250
# Below the usual 30s/60s idle cutoffs of load balancers and reverse proxies.
DEFAULT_STREAM_KEEPALIVE_S = 25.0
DEFAULT_STREAM_OUTBOUND_QUEUE_MAX = 256
DEFAULT_STREAM_ALLOWED_ORIGINS: tuple[str, ...] = (
    "https://collab-todo-66eb2.web.app",
    "https://collab-todo-66eb2.firebaseapp.com",
)

__all__ = [
    "DEFAULT_STREAM_ALLOWED_ORIGINS",
    "DEFAULT_STREAM_DEBOUNCE_MS",
    "DEFAULT_STREAM_KEEPALIVE_S",
    "DEFAULT_STREAM_OUTBOUND_QUEUE_MAX",
    "ENV_STREAM_ALLOWED_ORIGINS",
    "ENV_STREAM_DEBOUNCE_MS",
    "ENV_STREAM_KEEPALIVE_S",
    "ENV_STREAM_OUTBOUND_QUEUE_MAX",
    "STREAM_ENDPOINT_PATH",
    "STREAM_EVENT_READY",
    "STREAM_EVENT_TODOS_CHANGED",
    "STREAM_HEADERS",
    "STREAM_KEEPALIVE_COMMENT",
    "STREAM_MEDIA_TYPE",
]
