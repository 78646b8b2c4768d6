"""
playback.py — Timed Playback Engine
====================================
Reveals a recorded trace one Step at a time.  The trace is fully
materialised before playback starts and is never mutated here; the
engine only moves `current_step_index` through it.

State machine:
    IDLE / PAUSED  →  run()    →  RUNNING   (index -1 reveals step 0 at once)
    RUNNING        →  pause()  →  PAUSED
    RUNNING        →  (last step revealed)  →  COMPLETED
    any            →  step()   →  PAUSED, or COMPLETED at the last step
    any            →  reset()  →  IDLE, index -1, logs cleared

Timing:
    The delay before the next reveal is the current step's `delay_ms`
    when set, else SPEED_DELAYS[speed].  Every cancel bumps a generation
    counter; a tick carrying an old generation does nothing, so a
    cancelled reveal can never land even if the scheduler already
    dequeued it.

Observers:
    subscribe(cb) registers cb(engine), called after every change.
    The returned callable unsubscribes.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from algorithms.step import Step
from engine.config import DEFAULT_SPEED, SPEED_DELAYS, check_speed_delays, resolve_speed

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class ExecutionState(str, Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"


Listener = Callable[["PlaybackEngine"], None]


# ---------------------------------------------------------------------------
# PlaybackEngine
# ---------------------------------------------------------------------------
class PlaybackEngine:
    """
    Attributes (read-only properties):
        steps              : The trace being played (tuple).
        current_step_index : -1 before anything is revealed.
        current_step       : Step at that index, or None.
        execution_state    : ExecutionState.
        speed              : "slow" | "normal" | "fast".
        logs               : Descriptions of revealed steps, in order.
        progress           : Percent of the trace revealed (0 for empty).
    """

    def __init__(
        self,
        scheduler: Any,
        steps: Sequence[Step] = (),
        speed: str = DEFAULT_SPEED,
        speed_delays: Optional[Mapping[str, int]] = None,
    ):
        self._scheduler    = scheduler
        self._delays       = check_speed_delays(speed_delays or SPEED_DELAYS)
        self._speed        = resolve_speed(speed)
        self._steps:  Tuple[Step, ...] = tuple(steps)
        self._index:  int              = -1
        self._state:  ExecutionState   = ExecutionState.IDLE
        self._logs:   List[str]        = []
        self._timer:  Any              = None
        self._generation: int          = 0
        self._listeners:  List[Listener] = []

    # ------------------------------------------------------------------
    # Trace
    # ------------------------------------------------------------------
    def set_steps(self, steps: Sequence[Step]) -> None:
        """Replace the trace.  Always resets to IDLE / -1."""
        self._cancel_timer()
        self._steps = tuple(steps)
        logger.debug("trace replaced: %d steps", len(self._steps))
        self._reset_state()

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def run(self) -> None:
        if not self._steps or self._state in (ExecutionState.RUNNING, ExecutionState.COMPLETED):
            return
        self._cancel_timer()
        self._state = ExecutionState.RUNNING
        logger.debug("run from index %d", self._index)

        if self._index < 0:
            self._reveal(0)
            if self._state is ExecutionState.COMPLETED:
                self._notify()
                return
        self._schedule_next()
        self._notify()

    def pause(self) -> None:
        if self._state is not ExecutionState.RUNNING:
            return
        self._cancel_timer()
        self._state = ExecutionState.PAUSED
        logger.debug("paused at index %d", self._index)
        self._notify()

    def step(self) -> None:
        if not self._steps:
            return
        self._cancel_timer()
        if self._index < len(self._steps) - 1:
            self._state = ExecutionState.PAUSED
            self._reveal(self._index + 1)
        else:
            self._state = ExecutionState.COMPLETED
        self._notify()

    def reset(self) -> None:
        self._cancel_timer()
        self._reset_state()

    def set_speed(self, speed: str) -> None:
        """Takes effect from the next scheduled reveal."""
        self._speed = resolve_speed(speed)
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def current_step_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self._index < len(self._steps):
            return self._steps[self._index]
        return None

    @property
    def execution_state(self) -> ExecutionState:
        return self._state

    @property
    def speed(self) -> str:
        return self._speed

    @property
    def logs(self) -> Tuple[str, ...]:
        return tuple(self._logs)

    @property
    def progress(self) -> float:
        if not self._steps:
            return 0.0
        return (self._index + 1) / len(self._steps) * 100

    def next_delay_ms(self) -> int:
        step = self.current_step
        if step is not None and step.delay_ms:
            return step.delay_ms
        return self._delays[self._speed]

    def to_dict(self) -> Dict[str, Any]:
        step = self.current_step
        return {
            "current_step_index": self._index,
            "current_step":       step.to_dict() if step else None,
            "execution_state":    self._state.value,
            "speed":              self._speed,
            "total_steps":        len(self._steps),
            "progress":           self.progress,
            "logs":               list(self._logs),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _reveal(self, index: int) -> None:
        self._index = index
        step = self._steps[index]
        if step.description:
            self._logs.append(step.description)
        if index == len(self._steps) - 1:
            self._state = ExecutionState.COMPLETED
            logger.debug("completed after %d steps", len(self._steps))

    def _schedule_next(self) -> None:
        generation = self._generation
        self._timer = self._scheduler.schedule_once(
            self.next_delay_ms(), lambda: self._tick(generation)
        )

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self._state is not ExecutionState.RUNNING:
            return
        self._timer = None
        self._reveal(self._index + 1)
        if self._state is ExecutionState.RUNNING:
            self._schedule_next()
        self._notify()

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _reset_state(self) -> None:
        self._index = -1
        self._state = ExecutionState.IDLE
        self._logs  = []
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
