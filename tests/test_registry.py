"""
Cross-runner properties checked against every registered algorithm.
"""

import pytest

from algorithms import (
    CATEGORIES,
    REGISTRY,
    algorithms_by_category,
    algorithms_by_tag,
    get_algorithm,
    list_algorithms,
)

KEYS = list(REGISTRY)


@pytest.mark.parametrize("key", KEYS)
class TestRunnerContract:

    def test_initial_input_is_valid(self, key: str) -> None:
        info = get_algorithm(key)
        result = info.validate_input(info.get_initial_input())
        assert result, result.error

    def test_well_formed(self, key: str) -> None:
        info = get_algorithm(key)
        steps = info.generate_steps(info.get_initial_input())
        assert len(steps) >= 2
        assert steps[0].kind == "init"
        assert steps[-1].kind == "complete"

    def test_deterministic(self, key: str) -> None:
        info = get_algorithm(key)
        assert info.generate_steps(info.get_initial_input()) == info.generate_steps(info.get_initial_input())

    def test_snapshots_are_independent(self, key: str) -> None:
        info = get_algorithm(key)
        steps = info.generate_steps(info.get_initial_input())
        for prev, cur in zip(steps, steps[1:]):
            for name, value in prev.payload.items():
                if isinstance(value, (list, dict)) and name in cur.payload:
                    assert value is not cur.payload[name]

    def test_code_lines_in_pseudocode(self, key: str) -> None:
        info = get_algorithm(key)
        for step in info.generate_steps(info.get_initial_input()):
            if step.code_line is not None:
                assert 0 <= step.code_line < len(info.pseudocode)

    def test_initial_input_is_fresh_copy(self, key: str) -> None:
        info = get_algorithm(key)
        first = info.get_initial_input()
        first.clear()
        assert info.get_initial_input()

    @pytest.mark.parametrize("bad", [None, [], "text", 42, {}, {"unexpected": True}])
    def test_validate_never_raises(self, key: str, bad) -> None:
        assert not get_algorithm(key).validate_input(bad)


MALFORMED = [
    ("bubble_sort",         {"array": [3, "a", None, 1]}),
    ("merge_sort",          {"array": "321"}),
    ("binary_search",       {"array": [1, 2, 3]}),
    ("binary_search",       {"array": [1, 2, 3], "target": "2"}),
    ("linear_search",       {"array": None, "target": 1}),
    ("knapsack01",          {"weights": [-1], "values": [5], "capacity": 3}),
    ("knapsack01",          {"weights": [1.5, 2], "values": [4, 5], "capacity": 3}),
    ("knapsack01",          {"weights": [1], "values": [2], "capacity": "big"}),
    ("fractional_knapsack", {"weights": [1], "values": ["x"], "capacity": 5}),
    ("fractional_knapsack", {"weights": [0, 2], "values": [1, 2], "capacity": 5}),
    ("optimal_merge",       {"files": ["a", 3]}),
    ("closest_pair",        {"points": "x"}),
    ("bfs",                 {"nodes": 5, "edges": [[0, 1]], "start_node": 0}),
    ("dfs",                 {"nodes": [[0], {}], "edges": [[[0], 1]], "start_node": []}),
    ("bellman_ford",        {"vertices": 3, "edges": "x", "source": 0}),
    ("n_queens",            {"n": "4"}),
    ("knight_tour",         {"size": "5", "start_x": 0, "start_y": 0}),
    ("rat_maze",            {"size": 3, "maze": "x"}),
    ("tower_of_hanoi",      {"disks": -2}),
    ("fibonacci",           {"n": 3.5}),
    ("lcs",                 {"str1": 5, "str2": "AB"}),
]


@pytest.mark.parametrize("key, bad", MALFORMED)
def test_malformed_input_still_completes(key: str, bad) -> None:
    info = get_algorithm(key)
    assert not info.validate_input(bad)
    steps = info.generate_steps(bad)
    assert steps[0].kind == "init"
    assert steps[-1].kind == "complete"


class TestRegistryLookups:

    def test_get_unknown(self) -> None:
        assert get_algorithm("nope") is None

    def test_list_preserves_order(self) -> None:
        assert [a.key for a in list_algorithms()] == KEYS

    def test_categories_are_known(self) -> None:
        for info in list_algorithms():
            assert info.category in CATEGORIES

    def test_by_category(self) -> None:
        keys = {a.key for a in algorithms_by_category("sorting")}
        assert keys == {"bubble_sort", "selection_sort", "insertion_sort", "merge_sort", "quick_sort"}

    def test_by_tag(self) -> None:
        assert "bellman_ford" in {a.key for a in algorithms_by_tag("negative-edges")}

    def test_wrong_field_types_do_not_raise(self) -> None:
        assert not get_algorithm("knight_tour").validate_input({"size": "5", "start_x": 0, "start_y": 0})
        assert not get_algorithm("bellman_ford").validate_input({"vertices": 3, "edges": "x", "source": 0})
        assert not get_algorithm("sudoku").validate_input({"board": "x"})
