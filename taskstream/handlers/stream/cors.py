"""Exact-origin CORS headers for the event stream."""

from __future__ import annotations

from collections.abc import Collection


def cors_headers(origin: str | None, allowed_origins: Collection[str]) -> dict[str, str]:
    """Echo an allow-listed ``origin``; never a wildcard."""
    if not origin or origin not in allowed_origins:
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Vary": "Origin",
    }


__all__ = ["cors_headers"]
