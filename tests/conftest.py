"""
Pytest configuration and fixtures for the visualizer tests.

Playback is driven by a PollingScheduler on a FakeClock, so every
timing test is deterministic: advance the clock, poll, assert.
"""

from typing import List

import pytest

from algorithms.step import Step
from engine import AppConfig, FakeClock, PollingScheduler
from main import create_app


def make_steps(count: int, delay_ms=None) -> List[Step]:
    """Synthetic trace: init, `count - 2` ticks, complete."""
    steps = []
    for i in range(count):
        if i == 0:
            kind = "init"
        elif i == count - 1:
            kind = "complete"
        else:
            kind = "tick"
        steps.append(Step(kind=kind, payload={"i": i}, description=f"step {i}", delay_ms=delay_ms))
    return steps


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(fake_clock: FakeClock) -> PollingScheduler:
    return PollingScheduler(fake_clock)


@pytest.fixture
def app(fake_clock: FakeClock):
    """Flask app whose playback timers run on the fake clock."""
    flask_app = create_app(AppConfig(secret_key="test"), clock=fake_clock)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
