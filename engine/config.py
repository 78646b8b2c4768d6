"""
config.py — Timing & Server Configuration
==========================================
Speed presets (milliseconds between reveals) for the single playback
engine and the battle engine, plus the environment-driven settings the
Flask app reads at start-up.

    ALGOVIZ_SECRET_KEY       Flask session signing key (random per process if unset)
    ALGOVIZ_LOG_LEVEL        logging level name (default INFO)
    ALGOVIZ_MAX_TRACE_STEPS  refuse /api/run traces longer than this
    ALGOVIZ_MAX_WORKSPACES   sessions kept in memory before the least recently used is dropped
"""

import os
import secrets
from dataclasses import dataclass, field
from typing import Dict, Mapping

SPEEDS = ("slow", "normal", "fast")

# ---------------------------------------------------------------------------
# Speed presets (ms per step)
# ---------------------------------------------------------------------------
SPEED_DELAYS: Dict[str, int] = {
    "slow":   1500,   # teaching mode
    "normal": 800,
    "fast":   300,
}

# Battles reveal two traces at once, so they are paced faster.
BATTLE_SPEED_DELAYS: Dict[str, int] = {
    "slow":   200,
    "normal": 100,
    "fast":   30,
}

DEFAULT_SPEED = "normal"


def resolve_speed(name: str) -> str:
    """Validate a speed name.  Raises ValueError for anything not in SPEEDS."""
    if name not in SPEEDS:
        raise ValueError(f"Unknown speed: {name!r} (expected one of {', '.join(SPEEDS)})")
    return name


def check_speed_delays(delays: Mapping[str, int]) -> Dict[str, int]:
    """Copy of a speed→ms mapping, which must cover every speed with a positive delay."""
    missing = [s for s in SPEEDS if s not in delays]
    if missing:
        raise ValueError(f"speed_delays is missing: {', '.join(missing)}")
    if any(delays[s] <= 0 for s in SPEEDS):
        raise ValueError("speed delays must be positive")
    return {s: int(delays[s]) for s in SPEEDS}


# ---------------------------------------------------------------------------
# Server settings
# ---------------------------------------------------------------------------
def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class AppConfig:
    secret_key:      str = field(default_factory=lambda: secrets.token_hex(32))
    log_level:       str = "INFO"
    max_trace_steps: int = 100_000
    max_workspaces:  int = 256
    speed_delays:        Dict[str, int] = field(default_factory=lambda: dict(SPEED_DELAYS))
    battle_speed_delays: Dict[str, int] = field(default_factory=lambda: dict(BATTLE_SPEED_DELAYS))

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Read ALGOVIZ_* variables at call time, so tests can monkeypatch them."""
        return cls(
            secret_key=os.environ.get("ALGOVIZ_SECRET_KEY") or secrets.token_hex(32),
            log_level=os.environ.get("ALGOVIZ_LOG_LEVEL", cls.log_level).upper(),
            max_trace_steps=_env_int("ALGOVIZ_MAX_TRACE_STEPS", cls.max_trace_steps),
            max_workspaces=_env_int("ALGOVIZ_MAX_WORKSPACES", cls.max_workspaces),
        )
