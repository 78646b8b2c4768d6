"""
selection_sort.py — Selection Sort
===================================
Repeatedly selects the minimum of the unsorted suffix and swaps it to
the front.

Kinds: init, select-min-start, compare, new-min, swap, after-swap,
sorted, complete.
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import number_list, validate_array_input


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",              # 0
    "    n ← len(arr)",                       # 1
    "    for i in 0 … n-2:",                  # 2
    "        min_idx ← i",                    # 3
    "        for j in i+1 … n-1:",            # 4
    "            if arr[j] < arr[min_idx]:",  # 5
    "                min_idx ← j",            # 6
    "        if min_idx ≠ i:",                # 7
    "            swap(arr[i], arr[min_idx])", # 8
    "        // arr[i] is in place",        # 9
    "    return arr",                         # 10
]


def initial_input() -> Dict[str, Any]:
    return {"array": [64, 25, 12, 22, 11]}


def selection_sort(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb  = StepBuilder()
    arr = number_list(data.get("array"))
    n   = len(arr)

    yield sb.snapshot("init", code_line=0, description="Initialize the array", array=arr)

    for i in range(n - 1):
        min_idx = i
        yield sb.snapshot(
            "select-min-start", code_line=3,
            description=f"Finding minimum in unsorted portion starting at index {i}",
            current_min=i, array=arr,
        )

        for j in range(i + 1, n):
            yield sb.snapshot(
                "compare", code_line=5,
                description=f"Compare arr[{min_idx}]={arr[min_idx]} with arr[{j}]={arr[j]}",
                indices=[min_idx, j], array=arr,
            )
            if arr[j] < arr[min_idx]:
                yield sb.snapshot(
                    "new-min", code_line=6,
                    description=f"New minimum found: {arr[j]} at index {j}",
                    old_min=min_idx, new_min=j, array=arr,
                )
                min_idx = j

        if min_idx != i:
            yield sb.snapshot(
                "swap", code_line=8,
                description=f"Swap arr[{i}]={arr[i]} with arr[{min_idx}]={arr[min_idx]}",
                indices=[i, min_idx], array=arr,
            )
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            yield sb.snapshot(
                "after-swap", code_line=8, description="After swap",
                indices=[i, min_idx], array=arr,
            )

        yield sb.snapshot(
            "sorted", code_line=9,
            description=f"Element at position {i} is now sorted",
            index=i, array=arr,
        )

    yield sb.snapshot("complete", code_line=10, description="Array is fully sorted!", array=arr)


def validate(data: Dict[str, Any]) -> Validation:
    return validate_array_input(data)
