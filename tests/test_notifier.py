# tests/test_notifier.py

from __future__ import annotations

import asyncio

import pytest

from todolist.core.notifier import ChangeNotifier

from .fakes import FailingSubscriber, RecordingSubscriber


@pytest.mark.asyncio
async def test_notify_calls_sync_and_async_subscribers() -> None:
    notifier = ChangeNotifier("test")
    sync_calls: list[int] = []
    async_sub = RecordingSubscriber()

    notifier.subscribe(lambda: sync_calls.append(1))
    notifier.subscribe(async_sub)

    errors = await notifier.notify()

    assert errors == []
    assert sync_calls == [1]
    assert async_sub.calls == 1


@pytest.mark.asyncio
async def test_notify_waits_for_slow_subscribers() -> None:
    notifier = ChangeNotifier("test")
    slow = RecordingSubscriber(delay=0.02)
    notifier.subscribe(slow)

    await notifier.notify()

    # Completed, not merely scheduled.
    assert slow.calls == 1


@pytest.mark.asyncio
async def test_failing_subscribers_are_isolated_and_reported() -> None:
    notifier = ChangeNotifier("test")
    before = RecordingSubscriber()
    sync_bad = FailingSubscriber(is_async=False)
    async_bad = FailingSubscriber(is_async=True)
    after = RecordingSubscriber()

    for sub in (before, sync_bad, async_bad, after):
        notifier.subscribe(sub)

    errors = await notifier.notify()

    assert before.calls == after.calls == 1
    assert sync_bad.calls == async_bad.calls == 1
    assert len(errors) == 2
    assert all(isinstance(e, RuntimeError) for e in errors)


@pytest.mark.asyncio
async def test_async_subscribers_run_concurrently() -> None:
    notifier = ChangeNotifier("test")
    a_started = asyncio.Event()
    b_started = asyncio.Event()

    # Each waits for the other: sequential dispatch would hang.
    async def sub_a() -> None:
        a_started.set()
        await b_started.wait()

    async def sub_b() -> None:
        b_started.set()
        await a_started.wait()

    notifier.subscribe(sub_a)
    notifier.subscribe(sub_b)

    errors = await asyncio.wait_for(notifier.notify(), timeout=1.0)
    assert errors == []


@pytest.mark.asyncio
async def test_unsubscribe() -> None:
    notifier = ChangeNotifier("test")
    sub = RecordingSubscriber()
    token = notifier.subscribe(sub)

    assert len(notifier) == 1
    assert notifier.unsubscribe(token) is True
    assert notifier.unsubscribe(token) is False
    assert len(notifier) == 0

    await notifier.notify()
    assert sub.calls == 0


@pytest.mark.asyncio
async def test_subscriber_may_unsubscribe_itself_during_notify() -> None:
    notifier = ChangeNotifier("test")
    other = RecordingSubscriber()
    calls = {"once": 0}
    token = 0

    def once() -> None:
        calls["once"] += 1
        notifier.unsubscribe(token)

    token = notifier.subscribe(once)
    notifier.subscribe(other)

    await notifier.notify()
    await notifier.notify()

    assert calls["once"] == 1
    assert other.calls == 2
