"""Тесты для Scheduler и DelayedTrustVerification."""

import asyncio

import pytest

from slenderhub.core.domain.script import Task, TaskType
from slenderhub.gateway.scheduler import AsyncioScheduler, ManualScheduler
from slenderhub.gateway.verification import DelayedTrustVerification


class TestManualScheduler:
    """Виртуальные часы."""

    def test_fires_in_time_order(self):
        s = ManualScheduler()
        fired = []
        s.call_later(200, lambda: fired.append("late"))
        s.call_later(100, lambda: fired.append("early"))
        s.call_later(100, lambda: fired.append("early-2"))

        assert s.advance(250) == 3
        assert fired == ["early", "early-2", "late"]
        assert s.now_ms == 250

    def test_not_due_not_fired(self):
        s = ManualScheduler()
        fired = []
        s.call_later(100, lambda: fired.append(1))

        s.advance(99)

        assert fired == []
        assert s.pending_count == 1

    def test_cancelled_timer_skipped(self):
        s = ManualScheduler()
        fired = []
        handle = s.call_later(100, lambda: fired.append(1))

        handle.cancel()
        s.advance(1000)

        assert fired == []
        assert not handle.fired
        assert s.pending_count == 0

    def test_timer_scheduled_from_callback_fires_within_window(self):
        s = ManualScheduler()
        fired = []
        s.call_later(100, lambda: s.call_later(50, lambda: fired.append(s.now_ms)))

        s.advance(150)

        assert fired == [150]

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            ManualScheduler().call_later(-1, lambda: None)
        with pytest.raises(ValueError):
            ManualScheduler().advance(-1)


class TestAsyncioScheduler:
    def test_fires_on_running_loop(self):
        fired = []

        async def main():
            s = AsyncioScheduler()
            s.call_later(1, lambda: fired.append(True))
            await asyncio.sleep(0.05)

        asyncio.run(main())

        assert fired == [True]

    def test_cancel(self):
        fired = []

        async def main():
            s = AsyncioScheduler()
            handle = s.call_later(1, lambda: fired.append(True))
            handle.cancel()
            await asyncio.sleep(0.05)

        asyncio.run(main())

        assert fired == []


class TestDelayedTrustVerification:
    def test_confirms_after_delay(self):
        s = ManualScheduler()
        verification = DelayedTrustVerification(s, delay_ms=1500)
        task = Task(id="t", type=TaskType.VISIT_URL, url="https://example.org")
        confirmed = []

        verification.begin(task, lambda: confirmed.append(task.id))
        s.advance(1499)
        assert confirmed == []
        s.advance(1)
        assert confirmed == ["t"]

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            DelayedTrustVerification(ManualScheduler(), delay_ms=-5)
