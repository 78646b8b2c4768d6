"""
scheduler.py — Injected One-Shot Timers
========================================
The playback engines never sleep or start threads.  They ask a
scheduler to call them back once after a delay and keep the returned
handle so a pending reveal can be cancelled.

    handle = scheduler.schedule_once(800, engine_tick)
    handle.cancel()          # idempotent

Two implementations:

  • PollingScheduler — timers sit in a heap and fire when the host calls
    poll().  The Flask app polls on every state request; tests drive it
    with a FakeClock, which makes playback fully deterministic.
  • AsyncioScheduler — thin wrapper over loop.call_later for asyncio hosts.

Timers scheduled from inside a firing callback are based on the firing
timer's due time, not the wall clock, so one poll() after a long gap
catches up on every reveal that should have happened in between.
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Returned by schedule_once().  cancel() may be called any number of times."""

    __slots__ = ("due", "_callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due       = due
        self._callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def _fire(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self._callback()


class FakeClock:
    """Manually advanced clock (seconds) for PollingScheduler in tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


# ---------------------------------------------------------------------------
# PollingScheduler
# ---------------------------------------------------------------------------
class PollingScheduler:

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()
        self._firing_at: Optional[float] = None

    def schedule_once(self, delay_ms: float, fn: Callable[[], None]) -> TimerHandle:
        base = self._firing_at if self._firing_at is not None else self._clock()
        handle = TimerHandle(base + max(delay_ms, 0) / 1000.0, fn)
        heapq.heappush(self._heap, (handle.due, next(self._seq), handle))
        return handle

    def poll(self) -> int:
        """Fire every timer that is due now, in due order.  Returns how many fired."""
        now = self._clock()
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            due, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            self._firing_at = due
            try:
                handle._fire()
            finally:
                self._firing_at = None
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def next_due(self) -> Optional[float]:
        live = [due for due, _, h in self._heap if not h.cancelled]
        return min(live) if live else None


# ---------------------------------------------------------------------------
# AsyncioScheduler
# ---------------------------------------------------------------------------
class AsyncioScheduler:

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule_once(self, delay_ms: float, fn: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000.0, fn)
