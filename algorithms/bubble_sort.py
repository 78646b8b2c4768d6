"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Yields a Step at every meaningful event:
  1. Start of each outer pass            →  "outer-loop"
  2. Every adjacent comparison           →  "compare"
  3. Before / after every swap           →  "swap" / "after-swap"
  4. Largest unsorted element settles    →  "sorted"
  5. Final step                          →  "complete"

Every payload carries the full `array` snapshot.
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import number_list, validate_array_input


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = code_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                # 0
    "    n ← len(arr)",                      # 1
    "    for i in 0 … n-2:",                 # 2
    "        for j in 0 … n-i-2:",           # 3
    "            if arr[j] > arr[j+1]:",     # 4
    "                swap(arr[j], arr[j+1])",# 5
    "        // arr[n-1-i] is in place",   # 6
    "    return arr",                        # 7
]


def initial_input() -> Dict[str, Any]:
    return {"array": [64, 34, 25, 12, 22, 11, 90]}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bubble_sort(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb  = StepBuilder()
    arr = number_list(data.get("array"))
    n   = len(arr)

    yield sb.snapshot("init", code_line=0, description="Initialize the array", array=arr)

    for i in range(n - 1):
        yield sb.snapshot(
            "outer-loop", code_line=2,
            description=f"Pass {i + 1}: bubbling largest to position {n - 1 - i}",
            i=i, array=arr,
        )

        for j in range(n - i - 1):
            yield sb.snapshot(
                "compare", code_line=4,
                description=f"Compare arr[{j}]={arr[j]} with arr[{j + 1}]={arr[j + 1]}",
                indices=[j, j + 1], array=arr,
            )

            if arr[j] > arr[j + 1]:
                yield sb.snapshot(
                    "swap", code_line=5,
                    description=f"Swap {arr[j]} and {arr[j + 1]}",
                    indices=[j, j + 1], array=arr,
                )
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                yield sb.snapshot(
                    "after-swap", code_line=5,
                    description=f"After swap: arr[{j}]={arr[j]}, arr[{j + 1}]={arr[j + 1]}",
                    indices=[j, j + 1], array=arr,
                )

        yield sb.snapshot(
            "sorted", code_line=6,
            description=f"Element at position {n - 1 - i} is now sorted",
            index=n - 1 - i, array=arr,
        )

    yield sb.snapshot("complete", code_line=7, description="Array is fully sorted!", array=arr)


def validate(data: Dict[str, Any]) -> Validation:
    return validate_array_input(data)
