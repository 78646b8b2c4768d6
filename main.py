"""
main.py — Algorithm Playback Visualizer Flask App
==================================================
JSON API over the runners and the server-side playback engines.

Routes:
  GET  /api/algorithms                 – registry listing (?category=…)
  GET  /api/algorithms/<key>           – info, pseudocode, default input
  POST /api/validate                   – {algo_key, input} → validation
  POST /api/run                        – validate + generate, load into playback
  POST /api/playback/<run|pause|step|reset>
  POST /api/playback/speed             – {speed}
  GET  /api/playback/state             – polls timers, returns engine state
  POST /api/battle/start               – two algorithms on one input
  POST /api/battle/<run|pause|step|reset>
  GET  /api/battle/state
  POST /api/problem                    – learning-test problem for a topic
  POST /api/problem/answer             – grade an answer
  POST /api/problem/run                – replay the active problem through a runner

State management:
  Engines live in memory, one Workspace per browser session, keyed by
  an id stored in the signed Flask session cookie.  Timers are driven
  by one PollingScheduler; every request polls it before reading or
  changing engine state, so playback advances between polls.  Only the
  most recently used `max_workspaces` sessions are kept; an evicted
  session's timers are cancelled.  Requests that touch engines run under
  one lock, because the scheduler and engines are not thread-safe.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request, session

from algorithms import CATEGORIES, get_algorithm, list_algorithms
from algorithms.inputs import BATTLE_INPUT_KINDS, battle_input
from algorithms.problems import Problem, fallback_problem, grade_answer, problem_runner_input
from engine import (
    AppConfig,
    BattleEngine,
    PlaybackEngine,
    PollingScheduler,
    Recorder,
    compare,
    export_steps,
    resolve_speed,
)

logger = logging.getLogger(__name__)

CONTROL_OPS = ("run", "pause", "step", "reset")
DEFAULT_BATTLE_SIZE = 20
MAX_BATTLE_SIZE = 50


# ---------------------------------------------------------------------------
# Per-session state
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    playback: PlaybackEngine
    battle:   BattleEngine
    algo_key: Optional[str] = None
    problem:  Optional[Problem] = None


class WorkspaceStore:
    """
    In-memory Workspace per session id, all sharing one scheduler.
    Least recently used workspaces are dropped above `config.max_workspaces`.
    """

    def __init__(self, config: AppConfig, scheduler: PollingScheduler):
        self.config    = config
        self.scheduler = scheduler
        self._spaces: "OrderedDict[str, Workspace]" = OrderedDict()

    def get(self, sid: str) -> Workspace:
        space = self._spaces.get(sid)
        if space is not None:
            self._spaces.move_to_end(sid)
            return space

        space = Workspace(
            playback=PlaybackEngine(self.scheduler, speed_delays=self.config.speed_delays),
            battle=BattleEngine(self.scheduler, speed_delays=self.config.battle_speed_delays),
        )
        self._spaces[sid] = space
        logger.debug("new workspace %s", sid)
        while len(self._spaces) > max(self.config.max_workspaces, 1):
            self._evict()
        return space

    def _evict(self) -> None:
        sid, space = self._spaces.popitem(last=False)
        space.playback.reset()
        space.battle.reset()
        logger.info("evicted workspace %s", sid)

    def __contains__(self, sid: str) -> bool:
        return sid in self._spaces

    def __len__(self) -> int:
        return len(self._spaces)


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(
    config: Optional[AppConfig] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Flask:
    config    = config or AppConfig.from_env()
    scheduler = PollingScheduler(clock) if clock is not None else PollingScheduler()
    store     = WorkspaceStore(config, scheduler)
    recorder  = Recorder()

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.json.sort_keys = False          # node ids may mix ints and strings
    app.config["ALGOVIZ"] = config
    app.extensions["algoviz"] = store
    lock = threading.Lock()
    app.extensions["algoviz_lock"] = lock

    def serialized(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            with lock:
                return view(*args, **kwargs)
        return wrapper

    def workspace() -> Workspace:
        """Caller must hold `lock` (every route using this is `serialized`)."""
        if "sid" not in session:
            session["sid"] = secrets.token_hex(16)
        scheduler.poll()
        return store.get(session["sid"])

    # -----------------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        category = request.args.get("category")
        if category is not None and category not in CATEGORIES:
            return _error(f"Unknown category: {category}", 404)
        algos = [a for a in list_algorithms() if category is None or a.category == category]
        return jsonify({
            "categories": CATEGORIES,
            "algorithms": [a.to_dict() for a in algos],
        })

    @app.route("/api/algorithms/<key>")
    def api_algorithm(key: str):
        info = get_algorithm(key)
        if info is None:
            return _error(f"Unknown algorithm: {key}", 404)
        return jsonify({
            **info.to_dict(),
            "pseudocode":    info.pseudocode,
            "initial_input": info.get_initial_input(),
        })

    @app.route("/api/validate", methods=["POST"])
    def api_validate():
        data = _body()
        info = get_algorithm(data.get("algo_key", ""))
        if info is None:
            return _error(f"Unknown algorithm: {data.get('algo_key')}", 404)
        return jsonify(info.validate_input(data.get("input")).to_dict())

    # -----------------------------------------------------------------------
    # Run + single playback
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    @serialized
    def api_run():
        data = _body()
        key  = data.get("algo_key", "")
        info = get_algorithm(key)
        if info is None:
            return _error(f"Unknown algorithm: {key}", 404)

        recording = recorder.record(key, data.get("input", info.get_initial_input()))
        if not recording.ok:
            logger.info("run rejected for %s: %s", key, recording.validation.error)
            return _error(recording.validation.error or "Invalid input")
        if len(recording.steps) > config.max_trace_steps:
            return _error(
                f"Trace has {len(recording.steps)} steps, limit is {config.max_trace_steps}"
            )

        space = workspace()
        space.algo_key = key
        space.playback.set_steps(recording.steps)
        logger.info("loaded %s: %d steps", key, len(recording.steps))
        return jsonify({
            "algo_key": key,
            "steps":    export_steps(recording.steps),
            "metrics":  recording.export()["metrics"],
            "state":    space.playback.to_dict(),
        })

    @app.route("/api/playback/speed", methods=["POST"])
    @serialized
    def api_playback_speed():
        space = workspace()
        try:
            space.playback.set_speed(_body().get("speed", ""))
        except ValueError as e:
            return _error(str(e))
        return jsonify(space.playback.to_dict())

    @app.route("/api/playback/state")
    @serialized
    def api_playback_state():
        space = workspace()
        return jsonify({"algo_key": space.algo_key, **space.playback.to_dict()})

    @app.route("/api/playback/<op>", methods=["POST"])
    @serialized
    def api_playback_control(op: str):
        if op not in CONTROL_OPS:
            return _error(f"Unknown playback operation: {op}", 404)
        space = workspace()
        getattr(space.playback, op)()
        return jsonify(space.playback.to_dict())

    # -----------------------------------------------------------------------
    # Battle
    # -----------------------------------------------------------------------
    @app.route("/api/battle/start", methods=["POST"])
    @serialized
    def api_battle_start():
        data = _body()
        key_a, key_b = data.get("algo_a", ""), data.get("algo_b", "")
        for key in (key_a, key_b):
            if get_algorithm(key) is None:
                return _error(f"Unknown algorithm: {key}", 404)

        shared = data.get("input")
        if shared is None:
            kind = data.get("input_kind", "random")
            size = data.get("size", DEFAULT_BATTLE_SIZE)
            if kind not in BATTLE_INPUT_KINDS:
                return _error(f"Unknown input kind: {kind}")
            if not isinstance(size, int) or isinstance(size, bool) or not (1 <= size <= MAX_BATTLE_SIZE):
                return _error(f"Size must be an integer between 1 and {MAX_BATTLE_SIZE}")
            shared = battle_input(kind, size, data.get("seed"))

        left, right = recorder.record(key_a, shared), recorder.record(key_b, shared)
        for side, rec in (("A", left), ("B", right)):
            if not rec.ok:
                return _error(f"Side {side} ({rec.algo_key}): {rec.validation.error}")

        speed = data.get("speed")
        if speed is not None:
            try:
                resolve_speed(speed)
            except ValueError as e:
                return _error(str(e))

        space = workspace()
        space.battle.set_steps(left.steps, right.steps)
        if speed is not None:
            space.battle.set_speed(speed)

        result = compare(left, right)
        logger.info("battle %s (%d) vs %s (%d)", key_a, len(left.steps), key_b, len(right.steps))
        return jsonify({
            "algo_a":  key_a,
            "algo_b":  key_b,
            "input":   shared,
            "comparison": {
                "winner_steps":       result.winner_steps,
                "winner_comparisons": result.winner_comparisons,
                "winner_swaps":       result.winner_swaps,
            },
            "state": space.battle.to_dict(),
        })

    @app.route("/api/battle/state")
    @serialized
    def api_battle_state():
        return jsonify(workspace().battle.to_dict())

    @app.route("/api/battle/<op>", methods=["POST"])
    @serialized
    def api_battle_control(op: str):
        if op not in CONTROL_OPS:
            return _error(f"Unknown battle operation: {op}", 404)
        space = workspace()
        getattr(space.battle, op)()
        return jsonify(space.battle.to_dict())

    # -----------------------------------------------------------------------
    # Learning test
    # -----------------------------------------------------------------------
    @app.route("/api/problem", methods=["POST"])
    @serialized
    def api_problem():
        data = _body()
        space = workspace()
        if "problem" in data:
            try:
                space.problem = Problem.from_dict(data["problem"])
            except ValueError as e:
                return _error(str(e))
        else:
            topic = data.get("topic", "sorting")
            logger.warning("using fallback problem for topic: %s", topic)
            space.problem = fallback_problem(topic)
        return jsonify(space.problem.to_dict())

    @app.route("/api/problem/answer", methods=["POST"])
    @serialized
    def api_problem_answer():
        space = workspace()
        if space.problem is None:
            return _error("No active problem, request one first")
        answer = _body().get("answer")
        if not isinstance(answer, str) or not answer:
            return _error("Answer must be an algorithm key")
        return jsonify({
            "problem_id":        space.problem.id,
            "answer":            answer,
            "result":            grade_answer(space.problem, answer),
            "optimal_algorithm": space.problem.optimal_algorithm,
            "explanation":       space.problem.explanation,
        })

    @app.route("/api/problem/run", methods=["POST"])
    @serialized
    def api_problem_run():
        space = workspace()
        if space.problem is None:
            return _error("No active problem, request one first")
        key = _body().get("algo_key", "")
        if get_algorithm(key) is None:
            return _error(f"Unknown algorithm: {key}", 404)
        try:
            data = problem_runner_input(space.problem, key)
        except ValueError as e:
            return _error(str(e))

        recording = recorder.record(key, data)
        if not recording.ok:
            return _error(recording.validation.error or "Invalid input")

        space.algo_key = key
        space.playback.set_steps(recording.steps)
        logger.info("problem %s replayed with %s: %d steps", space.problem.id, key, len(recording.steps))
        return jsonify({
            "problem_id": space.problem.id,
            "algo_key":   key,
            "input":      data,
            "steps":      export_steps(recording.steps),
            "metrics":    recording.export()["metrics"],
            "state":      space.playback.to_dict(),
        })

    return app


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = app.config["ALGOVIZ"]
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Algorithm Playback Visualizer")
    print("  Open http://localhost:5000/api/algorithms")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
