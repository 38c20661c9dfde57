"""Configuration module exports (env variable names and defaults only)."""

from .stream import STREAM_ENDPOINT_PATH
from .limits import DEFAULT_MAX_CONCURRENT_STREAMS

__all__ = [
    "DEFAULT_MAX_CONCURRENT_STREAMS",
    "STREAM_ENDPOINT_PATH",
]
