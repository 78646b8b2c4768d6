"""
insertion_sort.py — Insertion Sort
===================================
Grows a sorted prefix by lifting out `key = arr[i]` and shifting every
larger element one slot right until the key's slot is found.

Kinds: init, select-key, compare, shift, insert, complete.
Payloads carry `array` plus the floating `key` while it is lifted out.
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import number_list, validate_array_input


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",              # 0
    "    for i in 1 … n-1:",                  # 1
    "        key ← arr[i]",                   # 2
    "        j ← i - 1",                      # 3
    "        while j ≥ 0 and arr[j] > key:",  # 4
    "            arr[j+1] ← arr[j]",          # 5
    "            j ← j - 1",                  # 6
    "        arr[j+1] ← key",                 # 7
    "    return arr",                         # 8
]


def initial_input() -> Dict[str, Any]:
    return {"array": [12, 11, 13, 5, 6]}


def insertion_sort(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb  = StepBuilder()
    arr = number_list(data.get("array"))
    n   = len(arr)

    yield sb.snapshot("init", code_line=0, description="Initialize the array", array=arr)

    for i in range(1, n):
        key = arr[i]
        yield sb.snapshot(
            "select-key", code_line=2,
            description=f"Pick key arr[{i}]={key}; sorted prefix is arr[0…{i - 1}]",
            index=i, key=key, sorted_until=i - 1, array=arr,
        )

        j = i - 1
        while j >= 0:
            yield sb.snapshot(
                "compare", code_line=4,
                description=f"Compare arr[{j}]={arr[j]} with key {key}",
                indices=[j, j + 1], key=key, array=arr,
            )
            if arr[j] <= key:
                break
            arr[j + 1] = arr[j]
            yield sb.snapshot(
                "shift", code_line=5,
                description=f"Shift {arr[j]} right to index {j + 1}",
                from_index=j, to_index=j + 1, key=key, array=arr,
            )
            j -= 1

        arr[j + 1] = key
        yield sb.snapshot(
            "insert", code_line=7,
            description=f"Insert key {key} at index {j + 1}",
            index=j + 1, key=key, sorted_until=i, array=arr,
        )

    yield sb.snapshot("complete", code_line=8, description="Array is fully sorted!", array=arr)


def validate(data: Dict[str, Any]) -> Validation:
    return validate_array_input(data)
