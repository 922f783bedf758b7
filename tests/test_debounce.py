"""Tests for friday.search.debounce.DebouncedDispatcher."""

from __future__ import annotations

import asyncio

import pytest

from friday.search.debounce import DebouncedDispatcher


def _dispatcher(delay: float = 0.02, min_chars: int = 2):
    calls: list[str] = []
    cleared: list[bool] = []
    d = DebouncedDispatcher(
        calls.append,
        delay=delay,
        min_chars=min_chars,
        on_clear=lambda: cleared.append(True),
    )
    return d, calls, cleared


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "S", "é"])
async def test_short_input_clears_immediately_and_schedules_nothing(text):
    d, calls, cleared = _dispatcher()
    d.submit(text)
    assert cleared == [True]
    assert not d.pending
    await asyncio.sleep(0.06)
    assert calls == []


@pytest.mark.asyncio
async def test_rapid_submissions_fire_once_with_final_value():
    d, calls, _ = _dispatcher()
    for text in ("Se", "Sea", "Seat", "Seattle"):
        d.submit(text)
    await asyncio.sleep(0.08)
    assert calls == ["Seattle"]


@pytest.mark.asyncio
async def test_each_keystroke_restarts_the_window():
    d, calls, _ = _dispatcher(delay=0.1)
    d.submit("Sea")
    await asyncio.sleep(0.06)
    d.submit("Seat")
    await asyncio.sleep(0.06)
    assert calls == []          # 120 ms since first key, 60 ms since last
    await asyncio.sleep(0.1)
    assert calls == ["Seat"]


@pytest.mark.asyncio
async def test_short_input_cancels_pending_call():
    d, calls, cleared = _dispatcher()
    d.submit("Sea")
    d.submit("S")
    await asyncio.sleep(0.06)
    assert calls == []
    assert cleared == [True]


@pytest.mark.asyncio
async def test_separate_pauses_fire_separately():
    d, calls, _ = _dispatcher()
    d.submit("Sea")
    await asyncio.sleep(0.06)
    d.submit("Seattle")
    await asyncio.sleep(0.06)
    assert calls == ["Sea", "Seattle"]


@pytest.mark.asyncio
async def test_async_callback_is_awaited():
    seen: list[str] = []

    async def callback(text: str) -> None:
        await asyncio.sleep(0)
        seen.append(text)

    d = DebouncedDispatcher(callback, delay=0.01, min_chars=2)
    d.submit("Portland")
    await asyncio.sleep(0.05)
    assert seen == ["Portland"]


@pytest.mark.asyncio
async def test_cancel_drops_scheduled_call():
    d, calls, _ = _dispatcher()
    d.submit("Boston")
    assert d.pending
    d.cancel()
    assert not d.pending
    await asyncio.sleep(0.06)
    assert calls == []
