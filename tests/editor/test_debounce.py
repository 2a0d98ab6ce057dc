"""Tests for the trailing-edge debouncer."""

from __future__ import annotations

import asyncio

import pytest

from portfolio_builder.editor.debounce import Debouncer


@pytest.mark.unit
async def test_burst_of_triggers_runs_once() -> None:
    """Triggers inside the delay collapse into one trailing run."""
    calls = []
    debouncer = Debouncer("test", 0.02, lambda: calls.append(1))

    for _ in range(5):
        debouncer.trigger()
        await asyncio.sleep(0.005)

    assert calls == []
    await asyncio.sleep(0.05)
    assert calls == [1]
    assert debouncer.pending is False


@pytest.mark.unit
async def test_cancel_drops_pending_action() -> None:
    calls = []
    debouncer = Debouncer("test", 0.01, lambda: calls.append(1))
    debouncer.trigger()
    debouncer.cancel()
    await asyncio.sleep(0.03)
    assert calls == []


@pytest.mark.unit
async def test_flush_runs_pending_async_action_now() -> None:
    """Flush runs a pending coroutine action without waiting for the delay."""
    calls = []

    async def action():
        calls.append(1)

    debouncer = Debouncer("test", 10, action)
    debouncer.trigger()
    await debouncer.flush()
    assert calls == [1]
    assert debouncer.pending is False


@pytest.mark.unit
async def test_flush_without_pending_is_noop() -> None:
    calls = []
    debouncer = Debouncer("test", 0.01, lambda: calls.append(1))
    await debouncer.flush()
    assert calls == []


@pytest.mark.unit
async def test_running_action_is_not_cancelled_by_new_trigger() -> None:
    """An action already running completes even if the timer is cancelled."""
    started = asyncio.Event()
    release = asyncio.Event()
    finished = []

    async def action():
        started.set()
        await release.wait()
        finished.append(1)

    debouncer = Debouncer("test", 0.001, action)
    debouncer.trigger()
    await started.wait()
    debouncer.trigger()
    debouncer.cancel()
    release.set()
    await debouncer.wait_idle()
    assert finished == [1]


@pytest.mark.unit
async def test_failing_action_is_logged_not_raised(caplog) -> None:
    """Action failures are logged and never escape the timer."""

    def action():
        raise RuntimeError("boom")

    debouncer = Debouncer("boomer", 10, action)
    debouncer.trigger()
    await debouncer.flush()
    assert "Debounced action failed - name=boomer" in caplog.text
