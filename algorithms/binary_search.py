"""
binary_search.py — Binary Search
=================================
Requires a pre-sorted array (validate() enforces it).  Records the
bounds `left`, `right`, `mid` at every iteration.

Yields a Step for:
  1. Initial bounds                  →  "set-bounds"
  2. Each midpoint calculation       →  "calculate-mid"
  3. Each midpoint comparison        →  "compare"
  4. Discarding a half               →  "search-right" / "search-left"
  5. Bounds after the discard        →  "update-bounds"
  6. Outcome                         →  "found" (index, value) | "not-found"
  7. Final step                      →  "complete" (found, index)
"""

from typing import Any, Dict, Generator, List, Optional

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import (
    first_failure,
    is_number,
    number_list,
    require_keys,
    require_number,
    require_number_list,
    require_sorted,
    MAX_ARRAY_LENGTH,
)


PSEUDOCODE: List[str] = [
    "def binary_search(arr, target):",      # 0
    "    left ← 0",                          # 1
    "    right ← len(arr) - 1",              # 2
    "    while left ≤ right:",               # 3
    "        mid ← (left + right) // 2",     # 4
    "        if arr[mid] == target:",        # 5
    "            return mid",                # 6
    "        elif arr[mid] < target:",       # 7
    "            left ← mid + 1",            # 8
    "        else:",                         # 9
    "            right ← mid - 1",           # 10
    "    return NOT FOUND",                  # 11
]


def initial_input() -> Dict[str, Any]:
    return {"array": [2, 5, 8, 12, 16, 23, 38, 56, 72, 91], "target": 23}


def binary_search(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb     = StepBuilder()
    arr    = number_list(data.get("array"))
    target = data.get("target")
    # with no usable target the loop is skipped and the trace reports not-found
    left, right = 0, (len(arr) - 1 if is_number(target) else -1)
    found_index: Optional[int] = None

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Searching for {target} in sorted array",
        array=arr, target=target, left=left, right=right,
    )
    yield sb.snapshot(
        "set-bounds", code_line=2,
        description=f"Set left={left}, right={right}",
        left=left, right=right, target=target, array=arr,
    )

    while left <= right:
        mid = (left + right) // 2
        yield sb.snapshot(
            "calculate-mid", code_line=4,
            description=f"Calculate mid = ({left} + {right}) // 2 = {mid}",
            left=left, right=right, mid=mid, target=target, array=arr,
        )
        yield sb.snapshot(
            "compare", code_line=5,
            description=f"Compare arr[{mid}]={arr[mid]} with target {target}",
            left=left, right=right, mid=mid, mid_value=arr[mid], target=target, array=arr,
        )

        if arr[mid] == target:
            found_index = mid
            yield sb.snapshot(
                "found", code_line=6,
                description=f"Found {target} at index {mid}!",
                index=mid, value=arr[mid], left=left, right=right, target=target, array=arr,
            )
            break

        if arr[mid] < target:
            yield sb.snapshot(
                "search-right", code_line=8,
                description=f"{arr[mid]} < {target}, search right half: left = {mid + 1}",
                left=left, right=right, old_left=left, new_left=mid + 1,
                mid=mid, target=target, array=arr,
            )
            left = mid + 1
        else:
            yield sb.snapshot(
                "search-left", code_line=10,
                description=f"{arr[mid]} > {target}, search left half: right = {mid - 1}",
                left=left, right=right, old_right=right, new_right=mid - 1,
                mid=mid, target=target, array=arr,
            )
            right = mid - 1

        yield sb.snapshot(
            "update-bounds", code_line=11 if left > right else 3,
            description=f"Bounds updated: left={left}, right={right}",
            left=left, right=right, target=target, array=arr,
        )
    else:
        yield sb.snapshot(
            "not-found", code_line=11,
            description=f"{target} not found in array",
            target=target, array=arr,
        )

    found = found_index is not None
    yield sb.snapshot(
        "complete", code_line=6 if found else 11,
        description=(
            f"Search complete: {target} is at index {found_index}" if found
            else f"Search complete: {target} is absent"
        ),
        found=found, index=found_index if found else -1, target=target, array=arr,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "array", "target"),
        lambda: require_number_list(data["array"], "Array", MAX_ARRAY_LENGTH),
        lambda: require_sorted(data["array"], "Array must be sorted for binary search"),
        lambda: require_number(data["target"], "Target"),
    )
