"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every runner the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

    info  = get_algorithm("bubble_sort")
    data  = info.get_initial_input()
    if info.validate_input(data):
        steps = info.generate_steps(data)

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, category, fn, initial_input, validator, …),
        …
    }

Adding a runner is: write the module (PSEUDOCODE, initial_input(), the
generator, validate()), add one entry here.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional

from algorithms.step import Step, Validation
from algorithms.validation import require_mapping

# ---------------------------------------------------------------------------
# Import all runner modules
# ---------------------------------------------------------------------------
from algorithms import (
    bellman_ford,
    bfs,
    binary_search,
    bubble_sort,
    closest_pair,
    dfs,
    fibonacci,
    fractional_knapsack,
    insertion_sort,
    knapsack01,
    knight_tour,
    lcs,
    linear_search,
    merge_sort,
    n_queens,
    optimal_merge,
    quick_sort,
    rat_maze,
    selection_sort,
    sudoku,
    tower_of_hanoi,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Categories, in display order
# ---------------------------------------------------------------------------
CATEGORIES: Dict[str, str] = {
    "sorting":             "Algorithms that arrange elements in a specific order",
    "searching":           "Algorithms to find elements in data structures",
    "graph":               "Algorithms for traversing and analyzing graphs",
    "backtracking":        "Systematic search with pruning",
    "dynamic-programming": "Optimization by breaking down into subproblems",
    "greedy":              "Algorithms that make locally optimal choices",
    "other":               "Miscellaneous algorithms and techniques",
}


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card + runner contract for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                                          # registry key, e.g. "bubble_sort"
    label:            str                                          # human label, e.g. "Bubble Sort"
    category:         str                                          # one of CATEGORIES
    fn:               Callable[[Dict[str, Any]], Generator[Step, None, None]]
    initial_input:    Callable[[], Dict[str, Any]]                 # canonical default input
    validator:        Callable[[Dict[str, Any]], Validation]
    pseudocode:       List[str]                                    # lines for the code panel
    tags:             List[str] = field(default_factory=list)      # e.g. ["comparison", "stable"]
    complexity_time:  str       = ""                               # e.g. "O(n²)"
    complexity_space: str       = ""                               # e.g. "O(1)"
    description:      str       = ""                               # one-liner for the UI card

    def get_initial_input(self) -> Dict[str, Any]:
        """A fresh copy of the default input; callers may mutate it freely."""
        return copy.deepcopy(self.initial_input())

    def validate_input(self, data: Any) -> Validation:
        """Never raises: malformed shapes come back as a failed Validation."""
        result = require_mapping(data)
        if not result:
            return result
        try:
            return self.validator(data)
        except (TypeError, ValueError, KeyError, IndexError) as exc:
            logger.debug("validator for %s rejected malformed input: %r", self.key, exc)
            return Validation.fail("Input has an invalid shape")

    def generate_steps(self, data: Dict[str, Any]) -> List[Step]:
        """Run the generator to completion.  The caller's dict is never touched."""
        return list(self.fn(copy.deepcopy(data)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "category":         self.category,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


def _info(module: Any, key: str, label: str, category: str, **meta: Any) -> AlgoInfo:
    return AlgoInfo(
        key=key, label=label, category=category,
        fn=getattr(module, key),
        initial_input=module.initial_input,
        validator=module.validate,
        pseudocode=module.PSEUDOCODE,
        **meta,
    )


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- sorting ------------------------------------------------------------
    "bubble_sort": _info(
        bubble_sort, "bubble_sort", "Bubble Sort", "sorting",
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs until the list is sorted.",
    ),
    "selection_sort": _info(
        selection_sort, "selection_sort", "Selection Sort", "sorting",
        tags=["comparison", "unstable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Selects the minimum of the unsorted part and moves it to the front.",
    ),
    "insertion_sort": _info(
        insertion_sort, "insertion_sort", "Insertion Sort", "sorting",
        tags=["comparison", "stable", "in-place", "adaptive"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Builds the sorted array one item at a time by inserting each key.",
    ),
    "merge_sort": _info(
        merge_sort, "merge_sort", "Merge Sort", "sorting",
        tags=["divide-and-conquer", "stable", "not-in-place"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits the array in halves and merges the sorted halves.",
    ),
    "quick_sort": _info(
        quick_sort, "quick_sort", "Quick Sort", "sorting",
        tags=["divide-and-conquer", "unstable", "in-place"],
        complexity_time="O(n log n)", complexity_space="O(log n)",
        description="Partitions around a pivot, then sorts both sides recursively.",
    ),

    # -- searching ----------------------------------------------------------
    "linear_search": _info(
        linear_search, "linear_search", "Linear Search", "searching",
        tags=["sequential", "simple"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element in turn.",
    ),
    "binary_search": _info(
        binary_search, "binary_search", "Binary Search", "searching",
        tags=["divide-and-conquer", "sorted-input"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves the search space of a sorted array at every comparison.",
    ),

    # -- graph --------------------------------------------------------------
    "bfs": _info(
        bfs, "bfs", "Breadth-First Search", "graph",
        tags=["traversal", "shortest-path"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),
    "dfs": _info(
        dfs, "dfs", "Depth-First Search", "graph",
        tags=["traversal", "backtracking"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),
    "bellman_ford": _info(
        bellman_ford, "bellman_ford", "Bellman–Ford", "graph",
        tags=["weighted", "shortest-path", "negative-edges"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges and detects negative cycles.",
    ),

    # -- backtracking -------------------------------------------------------
    "n_queens": _info(
        n_queens, "n_queens", "N-Queens", "backtracking",
        tags=["constraint-satisfaction", "puzzle"],
        complexity_time="O(N!)", complexity_space="O(N)",
        description="Place N queens on an N×N board so no two attack each other.",
    ),
    "sudoku": _info(
        sudoku, "sudoku", "Sudoku Solver", "backtracking",
        tags=["constraint-satisfaction", "puzzle", "recursion"],
        complexity_time="O(9^(n·n))", complexity_space="O(n·n)",
        description="Fills empty cells with digits satisfying row, column and box constraints.",
    ),
    "rat_maze": _info(
        rat_maze, "rat_maze", "Rat in a Maze", "backtracking",
        tags=["pathfinding", "recursion", "maze"],
        complexity_time="O(2^(n·n))", complexity_space="O(n·n)",
        description="Finds a path from the top-left to the bottom-right cell avoiding walls.",
    ),
    "knight_tour": _info(
        knight_tour, "knight_tour", "Knight's Tour", "backtracking",
        tags=["chess", "recursion", "heuristic"],
        complexity_time="O(8^(n·n))", complexity_space="O(n·n)",
        description="Visits every square once with a knight, guided by Warnsdorff's rule.",
    ),
    "tower_of_hanoi": _info(
        tower_of_hanoi, "tower_of_hanoi", "Tower of Hanoi", "backtracking",
        tags=["recursion", "puzzle", "divide-and-conquer"],
        complexity_time="O(2^n)", complexity_space="O(n)",
        description="Moves a stack of disks between three rods, never larger on smaller.",
    ),

    # -- dynamic programming ------------------------------------------------
    "fibonacci": _info(
        fibonacci, "fibonacci", "Fibonacci (DP)", "dynamic-programming",
        tags=["tabulation", "optimization"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Tabulates Fibonacci numbers bottom-up.",
    ),
    "knapsack01": _info(
        knapsack01, "knapsack01", "0/1 Knapsack", "dynamic-programming",
        tags=["tabulation", "optimization", "knapsack"],
        complexity_time="O(n · W)", complexity_space="O(n · W)",
        description="Best value of whole items within a weight capacity.",
    ),
    "lcs": _info(
        lcs, "lcs", "Longest Common Subsequence", "dynamic-programming",
        tags=["tabulation", "strings"],
        complexity_time="O(m · n)", complexity_space="O(m · n)",
        description="Longest subsequence shared by two strings, with trace-back.",
    ),

    # -- greedy / other -----------------------------------------------------
    "fractional_knapsack": _info(
        fractional_knapsack, "fractional_knapsack", "Fractional Knapsack", "greedy",
        tags=["greedy", "optimization", "knapsack"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Takes items by value/weight ratio, splitting the last one.",
    ),
    "optimal_merge": _info(
        optimal_merge, "optimal_merge", "Optimal Merge Pattern", "greedy",
        tags=["greedy", "heap", "optimization"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Merges the two smallest files first for minimum total cost.",
    ),
    "closest_pair": _info(
        closest_pair, "closest_pair", "Closest Pair of Points", "other",
        tags=["geometry", "brute-force"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Compares all pairs to find the two nearest points.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "CATEGORIES",
    "REGISTRY",
    "Step",
    "Validation",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "algorithms_by_tag",
]
