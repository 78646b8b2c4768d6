"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackEngine, BattleEngine, PollingScheduler, Recorder
"""

from engine.config    import SPEED_DELAYS, BATTLE_SPEED_DELAYS, AppConfig, resolve_speed
from engine.scheduler import AsyncioScheduler, FakeClock, PollingScheduler, TimerHandle
from engine.playback  import ExecutionState, PlaybackEngine
from engine.battle    import BattleEngine
from engine.recorder  import Recorder, Recording, RunMetrics, ComparisonResult, compare, export_steps

__all__ = [
    "SPEED_DELAYS",
    "BATTLE_SPEED_DELAYS",
    "AppConfig",
    "resolve_speed",
    "AsyncioScheduler",
    "FakeClock",
    "PollingScheduler",
    "TimerHandle",
    "ExecutionState",
    "PlaybackEngine",
    "BattleEngine",
    "Recorder",
    "Recording",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "export_steps",
]
