"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
The pivot is always the LAST element of the range.  `i` marks the end
of the "≤ pivot" region; every element that belongs there is swapped in.

Kinds: init, partition-start, pivot-select, compare, swap, after-swap,
pivot-placed, recurse-left, recurse-right, complete.
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import number_list, validate_array_input


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, low, high):",            # 0
    "    if low < high:",                          # 1
    "        p ← partition(arr, low, high)",       # 2
    "        quick_sort(arr, low, p - 1)",         # 3
    "        quick_sort(arr, p + 1, high)",        # 4
    "",                                            # 5
    "def partition(arr, low, high):",              # 6
    "    pivot ← arr[high]",                       # 7
    "    i ← low - 1",                             # 8
    "    for j in low … high-1:",                  # 9
    "        if arr[j] ≤ pivot:",                  # 10
    "            i ← i + 1; swap(arr[i], arr[j])", # 11
    "    swap(arr[i+1], arr[high])",               # 12
    "    return i + 1",                            # 13
]


def initial_input() -> Dict[str, Any]:
    return {"array": [38, 27, 43, 3, 9, 82, 10]}


def quick_sort(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb  = StepBuilder()
    arr = number_list(data.get("array"))

    yield sb.snapshot("init", code_line=0, description="Initialize the array", array=arr)

    def partition(low: int, high: int) -> Generator[Step, None, int]:
        pivot = arr[high]
        yield sb.snapshot(
            "pivot-select", code_line=7,
            description=f"Select pivot: {pivot} at index {high}",
            pivot_index=high, pivot=pivot, low=low, high=high, array=arr,
        )

        i = low - 1
        for j in range(low, high):
            yield sb.snapshot(
                "compare", code_line=10,
                description=f"Compare arr[{j}]={arr[j]} with pivot {pivot}",
                indices=[j, high], i=i, pivot=pivot, array=arr,
            )
            if arr[j] <= pivot:
                i += 1
                if i != j:
                    yield sb.snapshot(
                        "swap", code_line=11,
                        description=f"Swap arr[{i}]={arr[i]} with arr[{j}]={arr[j]}",
                        indices=[i, j], array=arr,
                    )
                    arr[i], arr[j] = arr[j], arr[i]
                    yield sb.snapshot(
                        "after-swap", code_line=11, description="After swap",
                        indices=[i, j], array=arr,
                    )

        yield sb.snapshot(
            "swap", code_line=12,
            description=(
                f"Place pivot at correct position: swap arr[{i + 1}]={arr[i + 1]} "
                f"with pivot {arr[high]}"
            ),
            indices=[i + 1, high], array=arr,
        )
        arr[i + 1], arr[high] = arr[high], arr[i + 1]
        yield sb.snapshot(
            "pivot-placed", code_line=13,
            description=f"Pivot {pivot} is now at its final position {i + 1}",
            pivot_index=i + 1, array=arr,
        )
        return i + 1

    def sort(low: int, high: int) -> Generator[Step, None, None]:
        if low >= high:
            return
        yield sb.snapshot(
            "partition-start", code_line=2,
            description=f"Partitioning subarray [{low}…{high}]",
            low=low, high=high, array=arr,
        )
        p = yield from partition(low, high)

        yield sb.snapshot(
            "recurse-left", code_line=3,
            description=f"Recursing on left partition [{low}…{p - 1}]",
            low=low, high=p - 1, array=arr,
        )
        yield from sort(low, p - 1)

        yield sb.snapshot(
            "recurse-right", code_line=4,
            description=f"Recursing on right partition [{p + 1}…{high}]",
            low=p + 1, high=high, array=arr,
        )
        yield from sort(p + 1, high)

    yield from sort(0, len(arr) - 1)

    yield sb.snapshot("complete", code_line=0, description="Array is fully sorted!", array=arr)


def validate(data: Dict[str, Any]) -> Validation:
    return validate_array_input(data)
