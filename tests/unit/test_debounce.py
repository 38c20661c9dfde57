from __future__ import annotations

import asyncio

import pytest

from taskstream.handlers.stream.debounce import DebouncedNotifier


@pytest.mark.asyncio
async def test_burst_coalesces_into_one_emission() -> None:
    fired: list[float] = []
    loop = asyncio.get_running_loop()
    notifier = DebouncedNotifier(lambda: fired.append(loop.time()), window_s=0.05)

    last = 0.0
    for _ in range(5):
        notifier.schedule()
        last = loop.time()
        await asyncio.sleep(0.01)
    assert fired == []

    await asyncio.sleep(0.15)
    assert len(fired) == 1
    # Trailing edge: timed from the last call, not the first.
    assert fired[0] >= last + 0.05 - 0.005
    assert notifier.pending is False


@pytest.mark.asyncio
async def test_separate_windows_emit_separately() -> None:
    fired: list[int] = []
    notifier = DebouncedNotifier(lambda: fired.append(1), window_s=0.02)

    notifier.schedule()
    await asyncio.sleep(0.08)
    notifier.schedule()
    await asyncio.sleep(0.08)
    assert len(fired) == 2


@pytest.mark.asyncio
async def test_liveness_is_checked_when_the_timer_fires() -> None:
    fired: list[int] = []
    live = {"value": True}
    notifier = DebouncedNotifier(lambda: fired.append(1), window_s=0.02, is_live=lambda: live["value"])

    notifier.schedule()
    assert notifier.pending is True
    live["value"] = False
    await asyncio.sleep(0.08)
    assert fired == []
    assert notifier.pending is False


@pytest.mark.asyncio
async def test_cancel_drops_pending_emission() -> None:
    fired: list[int] = []
    notifier = DebouncedNotifier(lambda: fired.append(1), window_s=0.02)

    notifier.schedule()
    notifier.cancel()
    notifier.cancel()
    await asyncio.sleep(0.08)
    assert fired == []
