"""
linear_search.py — Linear Search
=================================
Checks every element left to right.  Works on unsorted arrays, which
makes it the natural baseline to race against binary search.
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import (
    first_failure,
    number_list,
    require_keys,
    require_number,
    require_number_list,
    MAX_ARRAY_LENGTH,
)


PSEUDOCODE: List[str] = [
    "def linear_search(arr, target):",  # 0
    "    for i in 0 … n-1:",             # 1
    "        if arr[i] == target:",      # 2
    "            return i",              # 3
    "    return NOT FOUND",              # 4
]


def initial_input() -> Dict[str, Any]:
    return {"array": [10, 24, 7, 31, 42, 5, 18], "target": 42}


def linear_search(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb     = StepBuilder()
    arr    = number_list(data.get("array"))
    target = data.get("target")
    index  = -1

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Searching for {target} by scanning left to right",
        array=arr, target=target,
    )

    for i, value in enumerate(arr):
        yield sb.snapshot(
            "compare", code_line=2,
            description=f"Compare arr[{i}]={value} with target {target}",
            index=i, value=value, target=target, array=arr,
        )
        if value == target:
            index = i
            yield sb.snapshot(
                "found", code_line=3,
                description=f"Found {target} at index {i}!",
                index=i, value=value, target=target, array=arr,
            )
            break
    else:
        yield sb.snapshot(
            "not-found", code_line=4,
            description=f"{target} not found in array",
            target=target, array=arr,
        )

    yield sb.snapshot(
        "complete", code_line=3 if index >= 0 else 4,
        description=f"Search complete after {index + 1 if index >= 0 else len(arr)} comparison(s)",
        found=index >= 0, index=index, target=target, array=arr,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "array", "target"),
        lambda: require_number_list(data["array"], "Array", MAX_ARRAY_LENGTH),
        lambda: require_number(data["target"], "Target"),
    )
