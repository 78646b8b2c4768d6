"""
Tests for BattleEngine: shared timer, winner rule.
"""

from conftest import make_steps
from engine import BattleEngine, ExecutionState, FakeClock, PollingScheduler


def _advance(clock: FakeClock, scheduler: PollingScheduler, ms: float) -> None:
    clock.advance(ms)
    scheduler.poll()


class TestBattle:

    def test_shorter_trace_wins(self, fake_clock, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(10), make_steps(25))
        battle.run()
        assert battle.current_step_index_a == -1
        _advance(fake_clock, scheduler, 100)
        assert (battle.current_step_index_a, battle.current_step_index_b) == (0, 0)

        _advance(fake_clock, scheduler, 2450)
        assert battle.current_step_index_a == 9
        assert battle.current_step_index_b == 24
        assert battle.execution_state is ExecutionState.COMPLETED
        assert battle.winner == "A"
        assert scheduler.pending == 0

    def test_finished_side_holds_its_last_step(self, fake_clock, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(10), make_steps(25))
        battle.run()
        _advance(fake_clock, scheduler, 1550)
        assert battle.current_step_index_a == 9
        assert battle.current_step_index_b == 14
        assert battle.progress_a == 100.0
        assert battle.winner is None

    def test_b_wins(self, fake_clock, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(7), make_steps(3), speed="fast")
        battle.run()
        _advance(fake_clock, scheduler, 30 * 7 + 10)
        assert battle.winner == "B"

    def test_tie(self, fake_clock, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(4), make_steps(4))
        battle.run()
        _advance(fake_clock, scheduler, 450)
        assert battle.winner == "tie"
        assert battle.execution_state is ExecutionState.COMPLETED

    def test_manual_step_advances_both(self, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(2), make_steps(3))
        battle.step()
        battle.step()
        assert battle.execution_state is ExecutionState.PAUSED
        assert (battle.current_step_index_a, battle.current_step_index_b) == (1, 1)
        battle.step()
        assert battle.execution_state is ExecutionState.COMPLETED
        assert battle.winner == "A"
        battle.step()
        assert battle.current_step_index_b == 2

    def test_pause_and_reset(self, fake_clock, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(5), make_steps(5))
        battle.run()
        _advance(fake_clock, scheduler, 200)
        battle.pause()
        _advance(fake_clock, scheduler, 1000)
        assert battle.current_step_index_a == 1
        battle.run()
        _advance(fake_clock, scheduler, 1000)
        assert battle.winner == "tie"
        battle.reset()
        assert battle.winner is None
        assert battle.current_step_index_a == -1
        assert battle.execution_state is ExecutionState.IDLE

    def test_empty_battle_is_noop(self, scheduler) -> None:
        battle = BattleEngine(scheduler)
        battle.run()
        assert battle.execution_state is ExecutionState.IDLE
        assert scheduler.pending == 0

    def test_to_dict(self, scheduler) -> None:
        battle = BattleEngine(scheduler, make_steps(2), make_steps(3))
        battle.step()
        state = battle.to_dict()
        assert state["current_step_a"]["kind"] == "init"
        assert state["total_steps_b"] == 3
        assert state["winner"] is None
