"""
Flask API tests.  Playback timers run on the fixture's FakeClock, so
"waiting" is fake_clock.advance() followed by any request (every
request polls the scheduler).
"""

import threading

import pytest

from engine import AppConfig
from main import create_app


class TestRegistryRoutes:

    def test_list(self, client) -> None:
        body = client.get("/api/algorithms").get_json()
        keys = [a["key"] for a in body["algorithms"]]
        assert "bubble_sort" in keys
        assert "closest_pair" in keys
        assert "sorting" in body["categories"]

    def test_list_by_category(self, client) -> None:
        body = client.get("/api/algorithms?category=greedy").get_json()
        assert {a["key"] for a in body["algorithms"]} == {"fractional_knapsack", "optimal_merge"}

    def test_unknown_category(self, client) -> None:
        assert client.get("/api/algorithms?category=quantum").status_code == 404

    def test_detail(self, client) -> None:
        body = client.get("/api/algorithms/lcs").get_json()
        assert body["initial_input"] == {"str1": "ABCDGH", "str2": "AEDFHR"}
        assert body["pseudocode"]

    def test_detail_unknown(self, client) -> None:
        assert client.get("/api/algorithms/bogo_sort").status_code == 404

    def test_validate(self, client) -> None:
        ok = client.post("/api/validate", json={"algo_key": "n_queens", "input": {"n": 4}}).get_json()
        bad = client.post("/api/validate", json={"algo_key": "n_queens", "input": {"n": 99}}).get_json()
        assert ok == {"valid": True}
        assert bad["valid"] is False
        assert bad["error"]

    def test_validate_unknown(self, client) -> None:
        assert client.post("/api/validate", json={"algo_key": "nope"}).status_code == 404


class TestRunAndPlayback:

    def test_run_loads_idle_engine(self, client) -> None:
        resp = client.post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": [3, 1, 2]}})
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["steps"][0]["kind"] == "init"
        assert body["steps"][-1]["payload"]["array"] == [1, 2, 3]
        assert body["metrics"]["total_steps"] == len(body["steps"])
        assert body["state"]["execution_state"] == "idle"
        assert body["state"]["current_step_index"] == -1

    def test_run_defaults_to_initial_input(self, client) -> None:
        body = client.post("/api/run", json={"algo_key": "fibonacci"}).get_json()
        assert body["steps"][-1]["payload"]["result"] == 55

    def test_run_invalid_input(self, client) -> None:
        resp = client.post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": []}})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_run_unknown(self, client) -> None:
        assert client.post("/api/run", json={"algo_key": "bogo_sort"}).status_code == 404

    def test_trace_limit(self, fake_clock) -> None:
        app = create_app(AppConfig(secret_key="test", max_trace_steps=5), clock=fake_clock)
        resp = app.test_client().post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": [3, 1, 2]}})
        assert resp.status_code == 400
        assert "limit" in resp.get_json()["error"]

    def test_playback_advances_with_clock(self, client, fake_clock) -> None:
        client.post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": [3, 1, 2]}})
        state = client.post("/api/playback/run").get_json()
        assert state["execution_state"] == "running"
        assert state["current_step_index"] == 0

        fake_clock.advance(1600)
        state = client.get("/api/playback/state").get_json()
        assert state["algo_key"] == "bubble_sort"
        assert state["current_step_index"] == 2
        assert len(state["logs"]) == 3

        state = client.post("/api/playback/pause").get_json()
        assert state["execution_state"] == "paused"
        fake_clock.advance(10_000)
        assert client.get("/api/playback/state").get_json()["current_step_index"] == 2

    def test_step_and_reset(self, client) -> None:
        client.post("/api/run", json={"algo_key": "linear_search", "input": {"array": [4, 2], "target": 2}})
        state = client.post("/api/playback/step").get_json()
        assert state["current_step"]["kind"] == "init"
        state = client.post("/api/playback/reset").get_json()
        assert state["current_step_index"] == -1
        assert state["logs"] == []

    def test_unknown_op(self, client) -> None:
        assert client.post("/api/playback/rewind").status_code == 404

    def test_speed(self, client, fake_clock) -> None:
        client.post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": [3, 1, 2]}})
        assert client.post("/api/playback/speed", json={"speed": "fast"}).get_json()["speed"] == "fast"
        client.post("/api/playback/run")
        fake_clock.advance(300)
        assert client.get("/api/playback/state").get_json()["current_step_index"] == 1

    def test_bad_speed(self, client) -> None:
        assert client.post("/api/playback/speed", json={"speed": "warp"}).status_code == 400

    def test_sessions_are_isolated(self, app) -> None:
        first, second = app.test_client(), app.test_client()
        first.post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": [2, 1]}})
        first.post("/api/playback/step")
        assert first.get("/api/playback/state").get_json()["current_step_index"] == 0
        assert second.get("/api/playback/state").get_json()["current_step_index"] == -1


class TestBattleRoutes:

    def test_start_with_shared_input(self, client, fake_clock) -> None:
        body = client.post("/api/battle/start", json={
            "algo_a": "insertion_sort", "algo_b": "bubble_sort",
            "input": {"array": [1, 2, 3, 4, 5]},
        }).get_json()
        assert body["input"] == {"array": [1, 2, 3, 4, 5]}
        assert body["state"]["execution_state"] == "idle"
        assert body["comparison"]["winner_steps"] in ("A", "B", "tie")

        client.post("/api/battle/run")
        fake_clock.advance(100 * 200)
        state = client.get("/api/battle/state").get_json()
        assert state["execution_state"] == "completed"
        assert state["winner"] == body["comparison"]["winner_steps"]
        assert state["current_step_index_a"] == state["total_steps_a"] - 1

    def test_generated_input_is_seeded(self, client) -> None:
        req = {"algo_a": "quick_sort", "algo_b": "merge_sort", "input_kind": "reverse", "size": 8}
        body = client.post("/api/battle/start", json=req).get_json()
        assert body["input"]["array"] == sorted(body["input"]["array"], reverse=True)
        assert len(body["input"]["array"]) == 8

        seeded = {**req, "input_kind": "random", "seed": 11}
        first = client.post("/api/battle/start", json=seeded).get_json()
        second = client.post("/api/battle/start", json=seeded).get_json()
        assert first["input"] == second["input"]

    def test_start_errors(self, client) -> None:
        assert client.post("/api/battle/start", json={"algo_a": "bubble_sort", "algo_b": "x"}).status_code == 404
        base = {"algo_a": "bubble_sort", "algo_b": "quick_sort"}
        assert client.post("/api/battle/start", json={**base, "size": 0}).status_code == 400
        assert client.post("/api/battle/start", json={**base, "size": 51}).status_code == 400
        assert client.post("/api/battle/start", json={**base, "input_kind": "zigzag"}).status_code == 400
        assert client.post("/api/battle/start", json={**base, "input": {"array": "x"}}).status_code == 400
        assert client.post("/api/battle/start", json={**base, "speed": "warp"}).status_code == 400

    def test_bad_speed_leaves_battle_untouched(self, client) -> None:
        resp = client.post("/api/battle/start", json={
            "algo_a": "bubble_sort", "algo_b": "insertion_sort",
            "input": {"array": [3, 1, 2]}, "speed": "warp",
        })
        assert resp.status_code == 400
        state = client.get("/api/battle/state").get_json()
        assert state["total_steps_a"] == 0
        assert state["total_steps_b"] == 0

    def test_step_and_unknown_op(self, client) -> None:
        client.post("/api/battle/start", json={
            "algo_a": "bubble_sort", "algo_b": "selection_sort", "input": {"array": [2, 1]},
        })
        state = client.post("/api/battle/step").get_json()
        assert state["current_step_index_a"] == 0
        assert state["current_step_index_b"] == 0
        assert client.post("/api/battle/fly").status_code == 404


class TestProblemRoutes:

    def test_fallback_and_grading(self, client) -> None:
        problem = client.post("/api/problem", json={"topic": "searching"}).get_json()
        assert problem["optimal_algorithm"] == "binary_search"

        graded = client.post("/api/problem/answer", json={"answer": "linear_search"}).get_json()
        assert graded["problem_id"] == problem["id"]
        assert graded["result"] == "suboptimal"
        assert graded["optimal_algorithm"] == "binary_search"

    def test_generated_problem(self, client) -> None:
        client.post("/api/problem", json={"problem": {
            "title": "T", "description": "D", "input": [3, 1],
            "optimal_algorithm": "insertion_sort",
        }})
        graded = client.post("/api/problem/answer", json={"answer": "insertion-sort"}).get_json()
        assert graded["result"] == "correct"

    def test_malformed_problem(self, client) -> None:
        assert client.post("/api/problem", json={"problem": {"title": "T"}}).status_code == 400

    def test_answer_without_problem(self, client) -> None:
        assert client.post("/api/problem/answer", json={"answer": "quick_sort"}).status_code == 400

    def test_answer_must_be_string(self, client) -> None:
        client.post("/api/problem", json={})
        assert client.post("/api/problem/answer", json={"answer": 3}).status_code == 400

    def test_replay_problem_through_runner(self, client) -> None:
        problem = client.post("/api/problem", json={"topic": "searching"}).get_json()
        body = client.post("/api/problem/run", json={"algo_key": "binary_search"}).get_json()
        assert body["problem_id"] == problem["id"]
        assert body["input"]["array"] == sorted(problem["input"])
        assert body["steps"][-1]["kind"] == "complete"
        assert body["state"]["execution_state"] == "idle"
        assert body["state"]["total_steps"] == len(body["steps"])
        assert client.get("/api/playback/state").get_json()["algo_key"] == "binary_search"

    def test_replay_errors(self, client) -> None:
        assert client.post("/api/problem/run", json={"algo_key": "quick_sort"}).status_code == 400
        client.post("/api/problem", json={})
        assert client.post("/api/problem/run", json={"algo_key": "bogo_sort"}).status_code == 404
        assert client.post("/api/problem/run", json={"algo_key": "bfs"}).status_code == 400


class TestWorkspaces:

    def _sid(self, client) -> str:
        with client.session_transaction() as sess:
            return sess["sid"]

    def test_store_is_bounded(self, fake_clock) -> None:
        app = create_app(AppConfig(secret_key="test", max_workspaces=3), clock=fake_clock)
        for _ in range(10):
            app.test_client().get("/api/playback/state")
        assert len(app.extensions["algoviz"]) == 3

    def test_least_recently_used_is_evicted(self, fake_clock) -> None:
        app = create_app(AppConfig(secret_key="test", max_workspaces=2), clock=fake_clock)
        store = app.extensions["algoviz"]
        first, second, third = app.test_client(), app.test_client(), app.test_client()
        first.get("/api/playback/state")
        second.get("/api/playback/state")
        first.get("/api/playback/state")
        third.get("/api/playback/state")
        assert self._sid(first) in store
        assert self._sid(second) not in store
        assert self._sid(third) in store

    def test_eviction_cancels_timers(self, fake_clock) -> None:
        app = create_app(AppConfig(secret_key="test", max_workspaces=1), clock=fake_clock)
        store = app.extensions["algoviz"]
        runner = app.test_client()
        runner.post("/api/run", json={"algo_key": "bubble_sort", "input": {"array": [3, 1, 2]}})
        runner.post("/api/playback/run")
        assert store.scheduler.pending == 1

        app.test_client().get("/api/playback/state")
        assert store.scheduler.pending == 0
        # the evicted session starts over with a fresh workspace
        state = runner.get("/api/playback/state").get_json()
        assert state["execution_state"] == "idle"
        assert state["total_steps"] == 0

    def test_requests_wait_for_the_lock(self, app, client) -> None:
        lock = app.extensions["algoviz_lock"]
        statuses = []
        worker = threading.Thread(
            target=lambda: statuses.append(client.get("/api/playback/state").status_code)
        )
        with lock:
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            assert statuses == []
        worker.join(timeout=5)
        assert statuses == [200]

    def test_concurrent_sessions(self, app) -> None:
        statuses = []

        def session_run() -> None:
            client = app.test_client()
            client.post("/api/run", json={"algo_key": "insertion_sort", "input": {"array": [4, 3, 2, 1]}})
            statuses.append(client.post("/api/playback/step").status_code)

        workers = [threading.Thread(target=session_run) for _ in range(8)]
        for w in workers:
            w.start()
        for w in workers:
            w.join(timeout=10)
        assert statuses == [200] * 8
        assert len(app.extensions["algoviz"]) == 8


class TestConfig:

    def test_secret_key_is_random(self) -> None:
        first, second = AppConfig(), AppConfig()
        assert first.secret_key != second.secret_key
        assert len(first.secret_key) == 64

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ALGOVIZ_SECRET_KEY", "from-env")
        monkeypatch.setenv("ALGOVIZ_MAX_WORKSPACES", "7")
        monkeypatch.setenv("ALGOVIZ_LOG_LEVEL", "debug")
        config = AppConfig.from_env()
        assert config.secret_key == "from-env"
        assert config.max_workspaces == 7
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch) -> None:
        for name in ("ALGOVIZ_SECRET_KEY", "ALGOVIZ_MAX_WORKSPACES"):
            monkeypatch.delenv(name, raising=False)
        config = AppConfig.from_env()
        assert config.secret_key != AppConfig.from_env().secret_key
        assert config.max_workspaces == AppConfig().max_workspaces

    def test_from_env_bad_int(self, monkeypatch) -> None:
        monkeypatch.setenv("ALGOVIZ_MAX_WORKSPACES", "many")
        with pytest.raises(ValueError, match="ALGOVIZ_MAX_WORKSPACES"):
            AppConfig.from_env()
