"""
Tests for PlaybackEngine: state machine, timing, observers.
"""

import pytest

from conftest import make_steps
from engine import ExecutionState, FakeClock, PlaybackEngine, PollingScheduler


@pytest.fixture
def engine(scheduler: PollingScheduler) -> PlaybackEngine:
    return PlaybackEngine(scheduler, make_steps(5))


def _advance(clock: FakeClock, scheduler: PollingScheduler, ms: float) -> None:
    clock.advance(ms)
    scheduler.poll()


class TestRun:

    def test_initial_state(self, engine: PlaybackEngine) -> None:
        assert engine.current_step_index == -1
        assert engine.current_step is None
        assert engine.execution_state is ExecutionState.IDLE
        assert engine.progress == 0.0

    def test_run_reveals_first_step_at_once(self, engine: PlaybackEngine, scheduler: PollingScheduler) -> None:
        engine.run()
        assert engine.current_step_index == 0
        assert engine.execution_state is ExecutionState.RUNNING
        assert engine.logs == ("step 0",)
        assert scheduler.pending == 1

    def test_ticks_at_speed_delay(self, engine, fake_clock, scheduler) -> None:
        engine.run()
        _advance(fake_clock, scheduler, 400)
        assert engine.current_step_index == 0
        _advance(fake_clock, scheduler, 400)
        assert engine.current_step_index == 1

    def test_completes_at_last_step(self, engine, fake_clock, scheduler) -> None:
        engine.run()
        _advance(fake_clock, scheduler, 800 * 10)
        assert engine.current_step_index == 4
        assert engine.execution_state is ExecutionState.COMPLETED
        assert engine.progress == 100.0
        assert scheduler.pending == 0
        assert len(engine.logs) == 5

    def test_run_when_completed_is_noop(self, engine, fake_clock, scheduler) -> None:
        engine.run()
        _advance(fake_clock, scheduler, 800 * 10)
        engine.run()
        assert engine.current_step_index == 4
        assert scheduler.pending == 0

    def test_run_twice_keeps_one_timer(self, engine: PlaybackEngine, scheduler: PollingScheduler) -> None:
        engine.run()
        engine.run()
        assert scheduler.pending == 1

    def test_single_step_trace_completes_on_run(self, scheduler: PollingScheduler) -> None:
        engine = PlaybackEngine(scheduler, make_steps(1))
        engine.run()
        assert engine.execution_state is ExecutionState.COMPLETED
        assert scheduler.pending == 0

    def test_empty_trace_is_noop(self, scheduler: PollingScheduler) -> None:
        engine = PlaybackEngine(scheduler)
        engine.run()
        engine.step()
        assert engine.execution_state is ExecutionState.IDLE
        assert engine.current_step_index == -1

    def test_step_delay_overrides_speed(self, fake_clock, scheduler) -> None:
        engine = PlaybackEngine(scheduler, make_steps(3, delay_ms=50))
        engine.run()
        _advance(fake_clock, scheduler, 50)
        assert engine.current_step_index == 1

    def test_speed_change_applies_to_next_reveal(self, engine, fake_clock, scheduler) -> None:
        engine.run()
        engine.set_speed("fast")
        _advance(fake_clock, scheduler, 800)
        assert engine.current_step_index == 1
        _advance(fake_clock, scheduler, 300)
        assert engine.current_step_index == 2


class TestControls:

    def test_pause_cancels_pending_reveal(self, engine, fake_clock, scheduler) -> None:
        engine.run()
        engine.pause()
        assert engine.execution_state is ExecutionState.PAUSED
        assert scheduler.pending == 0
        _advance(fake_clock, scheduler, 5000)
        assert engine.current_step_index == 0

    def test_pause_when_idle_is_noop(self, engine: PlaybackEngine) -> None:
        engine.pause()
        assert engine.execution_state is ExecutionState.IDLE

    def test_resume_continues_from_index(self, engine, fake_clock, scheduler) -> None:
        engine.run()
        _advance(fake_clock, scheduler, 800)
        engine.pause()
        engine.run()
        assert engine.current_step_index == 1
        _advance(fake_clock, scheduler, 800)
        assert engine.current_step_index == 2

    def test_step_pauses_and_advances(self, engine: PlaybackEngine) -> None:
        engine.step()
        assert engine.current_step_index == 0
        assert engine.execution_state is ExecutionState.PAUSED
        engine.step()
        assert engine.current_step_index == 1

    def test_step_while_running_stops_timer(self, engine, scheduler) -> None:
        engine.run()
        engine.step()
        assert engine.current_step_index == 1
        assert engine.execution_state is ExecutionState.PAUSED
        assert scheduler.pending == 0

    def test_step_to_completion(self, engine: PlaybackEngine) -> None:
        for _ in range(5):
            engine.step()
        assert engine.current_step_index == 4
        assert engine.execution_state is ExecutionState.COMPLETED
        engine.step()
        assert engine.current_step_index == 4

    def test_reset_is_idempotent(self, engine, scheduler) -> None:
        engine.run()
        engine.reset()
        engine.reset()
        assert engine.current_step_index == -1
        assert engine.execution_state is ExecutionState.IDLE
        assert engine.logs == ()
        assert scheduler.pending == 0

    def test_set_steps_resets(self, engine, scheduler) -> None:
        engine.run()
        engine.set_steps(make_steps(3))
        assert engine.current_step_index == -1
        assert len(engine.steps) == 3
        assert scheduler.pending == 0

    def test_invalid_speed(self, engine: PlaybackEngine) -> None:
        with pytest.raises(ValueError):
            engine.set_speed("ludicrous")
        assert engine.speed == "normal"

    def test_next_delay(self, engine: PlaybackEngine) -> None:
        engine.set_speed("fast")
        assert engine.next_delay_ms() == 300

    def test_progress(self, engine: PlaybackEngine) -> None:
        engine.step()
        assert engine.progress == 20.0


class TestObservers:

    def test_notified_on_every_reveal(self, engine, fake_clock, scheduler) -> None:
        seen = []
        engine.subscribe(lambda e: seen.append(e.current_step_index))
        engine.run()
        _advance(fake_clock, scheduler, 1600)
        assert seen == [0, 1, 2]

    def test_unsubscribe(self, engine: PlaybackEngine) -> None:
        seen = []
        unsubscribe = engine.subscribe(lambda e: seen.append(e.current_step_index))
        engine.step()
        unsubscribe()
        unsubscribe()
        engine.step()
        assert seen == [0]

    def test_to_dict(self, engine: PlaybackEngine) -> None:
        engine.step()
        state = engine.to_dict()
        assert state["execution_state"] == "paused"
        assert state["current_step"]["kind"] == "init"
        assert state["total_steps"] == 5
        assert state["logs"] == ["step 0"]
