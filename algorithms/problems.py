"""
problems.py — Learning-Test Problems
=====================================
A problem is a scenario plus a sample array; the learner picks the
algorithm they think fits best and the answer is graded:

    "correct"     – the optimal algorithm
    "suboptimal"  – listed in suboptimal_options (works, but slower)
    "incorrect"   – anything else

Problems normally come from an external generator as JSON; from_dict()
checks that payload.  fallback_problem() is the built-in scenario used
when no generator is available.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from algorithms.validation import is_number

SORTING_KEYS   = ("bubble_sort", "selection_sort", "insertion_sort", "merge_sort", "quick_sort")
SEARCHING_KEYS = ("linear_search", "binary_search")

_fallback_ids = itertools.count(1)


def _algo_key(name: str) -> str:
    """Accept both "binary-search" and "binary_search"."""
    return name.strip().replace("-", "_")


@dataclass
class Problem:
    id:                 str
    title:              str
    description:        str
    input:              List[float]
    optimal_algorithm:  str
    explanation:        str
    suboptimal_options: List[str] = field(default_factory=list)
    incorrect_options:  List[str] = field(default_factory=list)
    target:             Optional[float] = None       # searching problems only

    @property
    def options(self) -> List[str]:
        """Every algorithm the learner may choose from, optimal first."""
        return [self.optimal_algorithm, *self.suboptimal_options, *self.incorrect_options]

    @classmethod
    def from_dict(cls, raw: Any) -> "Problem":
        """
        Build from a generator payload.  Both snake_case and camelCase
        field names are accepted.  Raises ValueError on a malformed payload.
        """
        if not isinstance(raw, dict):
            raise ValueError("Problem payload must be an object")

        def pick(*names: str, default: Any = None) -> Any:
            for name in names:
                if name in raw:
                    return raw[name]
            return default

        title       = pick("title")
        description = pick("description")
        values      = pick("input")
        optimal     = pick("optimal_algorithm", "optimalAlgorithm")
        explanation = pick("explanation", default="")
        suboptimal  = pick("suboptimal_options", "suboptimalOptions", default=[])
        incorrect   = pick("incorrect_options", "incorrectOptions", default=[])
        target      = pick("target")

        for name, value in (("title", title), ("description", description), ("optimal_algorithm", optimal)):
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Problem field '{name}' must be a non-empty string")
        if not isinstance(values, list) or not values or not all(is_number(v) for v in values):
            raise ValueError("Problem field 'input' must be a non-empty list of numbers")
        if not isinstance(explanation, str):
            raise ValueError("Problem field 'explanation' must be a string")
        for name, value in (("suboptimal_options", suboptimal), ("incorrect_options", incorrect)):
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Problem field '{name}' must be a list of algorithm ids")
        if target is not None and not is_number(target):
            raise ValueError("Problem field 'target' must be a number")

        return cls(
            id=str(pick("id", default=f"problem-{next(_fallback_ids)}")),
            title=title,
            description=description,
            input=list(values),
            optimal_algorithm=_algo_key(optimal),
            explanation=explanation,
            suboptimal_options=[_algo_key(v) for v in suboptimal],
            incorrect_options=[_algo_key(v) for v in incorrect],
            target=target,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":                 self.id,
            "title":              self.title,
            "description":        self.description,
            "input":              list(self.input),
            "optimal_algorithm":  self.optimal_algorithm,
            "explanation":        self.explanation,
            "suboptimal_options": list(self.suboptimal_options),
            "incorrect_options":  list(self.incorrect_options),
            "target":             self.target,
            "options":            self.options,
        }


# ---------------------------------------------------------------------------
# Built-in scenarios
# ---------------------------------------------------------------------------
def fallback_problem(topic: str) -> Problem:
    """Hardcoded problem for a topic.  Anything but "searching" gets the sorting one."""
    serial = next(_fallback_ids)
    if topic == "searching":
        return Problem(
            id=f"fallback-search-{serial}",
            title="Emergency Backup: Search Mission",
            description="Find the number 42 in this SORTED list.",
            input=[10, 20, 30, 40, 42, 50, 60, 70, 80, 90],
            optimal_algorithm="binary_search",
            explanation="Since the data is sorted, Binary Search is O(log n), much faster than Linear Search.",
            suboptimal_options=["linear_search"],
            incorrect_options=["bubble_sort", "quick_sort"],
            target=42,
        )
    return Problem(
        id=f"fallback-sort-{serial}",
        title="Emergency Backup: Sorting Crisis",
        description="Sort this list of numbers.",
        input=[5, 2, 9, 1, 5, 6],
        optimal_algorithm="quick_sort",
        explanation="Quick sort is generally the fastest O(n log n) algorithm for random data.",
        suboptimal_options=["bubble_sort", "insertion_sort"],
        incorrect_options=["linear_search"],
    )


def grade_answer(problem: Problem, algo_key: str) -> str:
    key = _algo_key(algo_key)
    if key == problem.optimal_algorithm:
        return "correct"
    if key in problem.suboptimal_options:
        return "suboptimal"
    return "incorrect"


def problem_runner_input(problem: Problem, algo_key: str) -> Dict[str, Any]:
    """
    Runner input that replays the problem's array through a sorting or
    searching runner.  Searching without an explicit target looks for
    the first element.  Other runners raise ValueError.
    """
    key = _algo_key(algo_key)
    if key in SORTING_KEYS:
        return {"array": list(problem.input)}
    if key in SEARCHING_KEYS:
        target = problem.target if problem.target is not None else problem.input[0]
        array = sorted(problem.input) if key == "binary_search" else list(problem.input)
        return {"array": array, "target": target}
    raise ValueError(f"Algorithm {algo_key!r} cannot run a learning-test problem")
