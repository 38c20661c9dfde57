"""Realtime task-change notification stream."""

__all__: list[str] = []
