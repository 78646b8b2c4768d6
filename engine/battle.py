"""
battle.py — Side-by-Side Battle Engine
=======================================
Plays two traces (A and B) on one shared timer.  Each tick advances
every side that still has unrevealed steps by one.  When neither side
has anything left the battle is COMPLETED and the winner is decided:

    fewer total steps  →  that side wins ("A" / "B")
    equal length       →  "tie"

Step counts are the whole scoring rule; there is no per-step cost.
Controls mirror PlaybackEngine and apply to both indices at once.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from algorithms.step import Step
from engine.config import BATTLE_SPEED_DELAYS, DEFAULT_SPEED, check_speed_delays, resolve_speed
from engine.playback import ExecutionState

logger = logging.getLogger(__name__)

TIE = "tie"


def _progress(index: int, total: int) -> float:
    return (index + 1) / total * 100 if total else 0.0


class BattleEngine:

    def __init__(
        self,
        scheduler: Any,
        steps_a: Sequence[Step] = (),
        steps_b: Sequence[Step] = (),
        speed: str = DEFAULT_SPEED,
        speed_delays: Optional[Mapping[str, int]] = None,
    ):
        self._scheduler = scheduler
        self._delays    = check_speed_delays(speed_delays or BATTLE_SPEED_DELAYS)
        self._speed     = resolve_speed(speed)
        self._steps_a: Tuple[Step, ...] = tuple(steps_a)
        self._steps_b: Tuple[Step, ...] = tuple(steps_b)
        self._index_a = -1
        self._index_b = -1
        self._state   = ExecutionState.IDLE
        self._winner: Optional[str] = None
        self._timer: Any = None
        self._generation = 0
        self._listeners: List[Callable[["BattleEngine"], None]] = []

    # ------------------------------------------------------------------
    # Traces
    # ------------------------------------------------------------------
    def set_steps(self, steps_a: Sequence[Step], steps_b: Sequence[Step]) -> None:
        self._cancel_timer()
        self._steps_a = tuple(steps_a)
        self._steps_b = tuple(steps_b)
        logger.debug("battle traces: A=%d B=%d steps", len(self._steps_a), len(self._steps_b))
        self._reset_state()

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def run(self) -> None:
        if not self._steps_a and not self._steps_b:
            return
        if self._state in (ExecutionState.RUNNING, ExecutionState.COMPLETED):
            return
        self._cancel_timer()
        if self._exhausted():
            self._finish()
        else:
            self._state = ExecutionState.RUNNING
            self._schedule_next()
        self._notify()

    def pause(self) -> None:
        if self._state is not ExecutionState.RUNNING:
            return
        self._cancel_timer()
        self._state = ExecutionState.PAUSED
        self._notify()

    def step(self) -> None:
        if not self._steps_a and not self._steps_b:
            return
        self._cancel_timer()
        if self._state is not ExecutionState.COMPLETED:
            self._state = ExecutionState.PAUSED
            self._advance()
        self._notify()

    def reset(self) -> None:
        self._cancel_timer()
        self._reset_state()

    def set_speed(self, speed: str) -> None:
        self._speed = resolve_speed(speed)
        self._notify()

    def subscribe(self, listener: Callable[["BattleEngine"], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step_index_a(self) -> int:
        return self._index_a

    @property
    def current_step_index_b(self) -> int:
        return self._index_b

    @property
    def current_step_a(self) -> Optional[Step]:
        return self._steps_a[self._index_a] if self._index_a >= 0 else None

    @property
    def current_step_b(self) -> Optional[Step]:
        return self._steps_b[self._index_b] if self._index_b >= 0 else None

    @property
    def execution_state(self) -> ExecutionState:
        return self._state

    @property
    def winner(self) -> Optional[str]:
        return self._winner

    @property
    def speed(self) -> str:
        return self._speed

    @property
    def progress_a(self) -> float:
        return _progress(self._index_a, len(self._steps_a))

    @property
    def progress_b(self) -> float:
        return _progress(self._index_b, len(self._steps_b))

    def to_dict(self) -> Dict[str, Any]:
        a, b = self.current_step_a, self.current_step_b
        return {
            "current_step_index_a": self._index_a,
            "current_step_index_b": self._index_b,
            "current_step_a":       a.to_dict() if a else None,
            "current_step_b":       b.to_dict() if b else None,
            "total_steps_a":        len(self._steps_a),
            "total_steps_b":        len(self._steps_b),
            "progress_a":           self.progress_a,
            "progress_b":           self.progress_b,
            "execution_state":      self._state.value,
            "speed":                self._speed,
            "winner":               self._winner,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _exhausted(self) -> bool:
        return (self._index_a >= len(self._steps_a) - 1
                and self._index_b >= len(self._steps_b) - 1)

    def _advance(self) -> None:
        if self._index_a < len(self._steps_a) - 1:
            self._index_a += 1
        if self._index_b < len(self._steps_b) - 1:
            self._index_b += 1
        if self._exhausted():
            self._finish()

    def _finish(self) -> None:
        self._state = ExecutionState.COMPLETED
        len_a, len_b = len(self._steps_a), len(self._steps_b)
        if len_a < len_b:
            self._winner = "A"
        elif len_b < len_a:
            self._winner = "B"
        else:
            self._winner = TIE
        logger.info("battle finished: A=%d B=%d steps, winner %s", len_a, len_b, self._winner)

    def _schedule_next(self) -> None:
        generation = self._generation
        self._timer = self._scheduler.schedule_once(
            self._delays[self._speed], lambda: self._tick(generation)
        )

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self._state is not ExecutionState.RUNNING:
            return
        self._timer = None
        self._advance()
        if self._state is ExecutionState.RUNNING:
            self._schedule_next()
        self._notify()

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _reset_state(self) -> None:
        self._index_a = -1
        self._index_b = -1
        self._state   = ExecutionState.IDLE
        self._winner  = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
