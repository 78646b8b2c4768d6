"""
Tests for the sorting runners.
"""

import pytest

from algorithms import get_algorithm
from algorithms.step import kinds

SORTERS = ["bubble_sort", "selection_sort", "insertion_sort", "merge_sort", "quick_sort"]


@pytest.mark.parametrize("key", SORTERS)
class TestSortingRunners:
    """Shared properties of every sorting runner."""

    @pytest.mark.parametrize("array", [
        [64, 34, 25, 12, 22, 11, 90],
        [5, 2, 9, 1, 5, 6],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7],
        [-3, 2.5, 0, -1],
    ])
    def test_final_array_is_sorted(self, key: str, array) -> None:
        steps = get_algorithm(key).generate_steps({"array": array})
        assert steps[0].kind == "init"
        assert steps[-1].kind == "complete"
        assert steps[-1].payload["array"] == sorted(array)

    def test_empty_array(self, key: str) -> None:
        steps = get_algorithm(key).generate_steps({"array": []})
        assert kinds(steps) == ["init", "complete"]
        assert steps[-1].payload["array"] == []

    def test_input_not_mutated(self, key: str) -> None:
        data = {"array": [3, 1, 2]}
        get_algorithm(key).generate_steps(data)
        assert data == {"array": [3, 1, 2]}

    def test_rejects_bad_input(self, key: str) -> None:
        info = get_algorithm(key)
        assert not info.validate_input({"array": []})
        assert not info.validate_input({"array": [1, "two"]})
        assert not info.validate_input({"array": None})
        assert not info.validate_input({})
        assert not info.validate_input("not a dict")


class TestBubbleSort:

    def test_scenario_three_elements(self) -> None:
        steps = get_algorithm("bubble_sort").generate_steps({"array": [3, 1, 2]})
        assert steps[-1].payload["array"] == [1, 2, 3]
        assert "swap" in kinds(steps)

    def test_swap_then_after_swap(self) -> None:
        steps = get_algorithm("bubble_sort").generate_steps({"array": [2, 1]})
        assert kinds(steps) == ["init", "outer-loop", "compare", "swap", "after-swap", "sorted", "complete"]
        swap, after = steps[3], steps[4]
        assert swap.payload["array"] == [2, 1]
        assert after.payload["array"] == [1, 2]

    def test_sorted_input_never_swaps(self) -> None:
        steps = get_algorithm("bubble_sort").generate_steps({"array": [1, 2, 3, 4]})
        assert "swap" not in kinds(steps)


class TestInsertionSort:

    def test_shifts_recorded(self) -> None:
        steps = get_algorithm("insertion_sort").generate_steps({"array": [3, 2, 1]})
        assert "shift" in kinds(steps)
        assert "insert" in kinds(steps)


class TestQuickSort:

    def test_pivot_and_partition_steps(self) -> None:
        steps = get_algorithm("quick_sort").generate_steps({"array": [5, 2, 9, 1, 5, 6]})
        assert "pivot-select" in kinds(steps)
        assert "compare" in kinds(steps)
        assert steps[-1].payload["array"] == [1, 2, 5, 5, 6, 9]


class TestMergeSort:

    def test_merge_steps(self) -> None:
        steps = get_algorithm("merge_sort").generate_steps({"array": [4, 1, 3, 2]})
        assert "split" in kinds(steps)
        assert "merged" in kinds(steps)
