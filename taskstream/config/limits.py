"""Admission control configuration."""

from __future__ import annotations

ENV_MAX_CONCURRENT_STREAMS = "MAX_CONCURRENT_STREAMS"

DEFAULT_MAX_CONCURRENT_STREAMS = 1000

STREAM_ERROR_AT_CAPACITY = "Server cannot accept new streams. Please try again later."

__all__ = [
    "DEFAULT_MAX_CONCURRENT_STREAMS",
    "ENV_MAX_CONCURRENT_STREAMS",
    "STREAM_ERROR_AT_CAPACITY",
]
