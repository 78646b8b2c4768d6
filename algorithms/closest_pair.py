"""
closest_pair.py — Closest Pair of Points (brute force)
=======================================================
Compares every pair (i < j) and keeps the smallest Euclidean distance.
The first pair reaching a distance wins ties.

Kinds: init, compare, new-best, complete (`pair`, `distance`).
`pair` is a list of two point indices, None when fewer than two points.
"""

import math
from typing import Any, Dict, Generator, List, Optional

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import as_list, first_failure, is_number, require_keys, require_non_empty_list

MAX_POINTS = 15

PSEUDOCODE: List[str] = [
    "def closest_pair(points):",                       # 0
    "    best ← ∞",                                     # 1
    "    for i in 0 … n-1:",                            # 2
    "        for j in i+1 … n-1:",                      # 3
    "            d ← dist(points[i], points[j])",       # 4
    "            if d < best:",                         # 5
    "                best ← d; pair ← (i, j)",          # 6
    "    return pair, best",                            # 7
]


def initial_input() -> Dict[str, Any]:
    return {"points": [[2, 3], [12, 30], [40, 50], [5, 1], [12, 10], [3, 4]]}


def _valid_point(p: Any) -> bool:
    return isinstance(p, (list, tuple)) and len(p) == 2 and all(is_number(c) for c in p)


def closest_pair(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb     = StepBuilder()
    points = [list(p) for p in as_list(data.get("points")) if _valid_point(p)]
    best: Optional[float] = None
    pair: Optional[List[int]] = None

    yield sb.snapshot(
        "init", code_line=1,
        description=f"Searching the closest pair among {len(points)} point(s)",
        points=points, pair=pair, distance=best,
    )

    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            d = math.dist(points[i], points[j])
            yield sb.snapshot(
                "compare", code_line=4,
                description=f"Distance between point {i} {tuple(points[i])} and point {j} {tuple(points[j])} is {d:.3f}",
                points=points, i=i, j=j, current_distance=d, pair=pair, distance=best,
            )
            if best is None or d < best:
                best, pair = d, [i, j]
                yield sb.snapshot(
                    "new-best", code_line=6,
                    description=f"New closest pair ({i}, {j}) with distance {d:.3f}",
                    points=points, i=i, j=j, pair=pair, distance=best,
                )

    if pair is None:
        summary = "Fewer than two points, no pair to report"
    else:
        summary = f"Closest pair: points {pair[0]} and {pair[1]}, distance {best:.3f}"
    yield sb.snapshot(
        "complete", code_line=7,
        description=summary,
        points=points, pair=pair, distance=best,
    )


def validate(data: Dict[str, Any]) -> Validation:

    def points_ok() -> Validation:
        points = data["points"]
        if not all(_valid_point(p) for p in points):
            return Validation.fail("Points must be [x, y] pairs of numbers")
        if len(points) < 2:
            return Validation.fail("Provide at least two points")
        if len(points) > MAX_POINTS:
            return Validation.fail(f"At most {MAX_POINTS} points are supported")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "points"),
        lambda: require_non_empty_list(data["points"], "Points"),
        points_ok,
    )
