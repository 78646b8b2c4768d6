"""
Tests for the injected one-shot timers.
"""

import asyncio

import pytest

from engine.scheduler import AsyncioScheduler, FakeClock, PollingScheduler


class TestPollingScheduler:

    def test_fires_only_when_due(self, fake_clock: FakeClock, scheduler: PollingScheduler) -> None:
        fired = []
        scheduler.schedule_once(100, lambda: fired.append("a"))
        fake_clock.advance(50)
        assert scheduler.poll() == 0
        fake_clock.advance(50)
        assert scheduler.poll() == 1
        assert fired == ["a"]

    def test_fires_in_due_order(self, fake_clock: FakeClock, scheduler: PollingScheduler) -> None:
        fired = []
        scheduler.schedule_once(300, lambda: fired.append("late"))
        scheduler.schedule_once(100, lambda: fired.append("early"))
        scheduler.schedule_once(100, lambda: fired.append("early-2"))
        fake_clock.advance(500)
        scheduler.poll()
        assert fired == ["early", "early-2", "late"]

    def test_cancel_is_idempotent(self, fake_clock: FakeClock, scheduler: PollingScheduler) -> None:
        fired = []
        handle = scheduler.schedule_once(10, lambda: fired.append(1))
        handle.cancel()
        handle.cancel()
        assert scheduler.pending == 0
        fake_clock.advance(50)
        assert scheduler.poll() == 0
        assert fired == []

    def test_rescheduling_catches_up(self, fake_clock: FakeClock, scheduler: PollingScheduler) -> None:
        fired = []

        def tick() -> None:
            fired.append(fake_clock())
            if len(fired) < 5:
                scheduler.schedule_once(100, tick)

        scheduler.schedule_once(100, tick)
        fake_clock.advance(1000)
        assert scheduler.poll() == 5
        assert scheduler.pending == 0

    def test_catch_up_stops_at_now(self, fake_clock: FakeClock, scheduler: PollingScheduler) -> None:
        count = []

        def tick() -> None:
            count.append(1)
            scheduler.schedule_once(100, tick)

        scheduler.schedule_once(100, tick)
        fake_clock.advance(350)
        assert scheduler.poll() == 3
        assert scheduler.pending == 1
        assert scheduler.next_due() == pytest.approx(0.4)

    def test_next_due_empty(self, scheduler: PollingScheduler) -> None:
        assert scheduler.next_due() is None


class TestAsyncioScheduler:

    def test_call_later(self) -> None:
        fired = []

        async def main() -> None:
            sched = AsyncioScheduler()
            sched.schedule_once(1, lambda: fired.append("x"))
            cancelled = sched.schedule_once(1, lambda: fired.append("y"))
            cancelled.cancel()
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert fired == ["x"]
