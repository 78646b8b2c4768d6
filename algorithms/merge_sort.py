"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort.  Recursion is expressed with `yield from`, so a
recursive call's Steps flow straight into the caller's trace.

Yields a Step for:
  1. Every split of a range into halves           →  "split"
  2. The start of every merge                     →  "merge-start"
  3. Every head-to-head comparison during merge   →  "compare"
  4. Every element written back into the array    →  "place"
  5. The end of every merge                       →  "merged"

Payload always carries the full `array`; merge steps also carry the
`left` / `right` auxiliary runs being merged.
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import number_list, validate_array_input


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, lo, hi):",                 # 0
    "    if lo ≥ hi: return",                        # 1
    "    mid ← (lo + hi) // 2",                      # 2
    "    merge_sort(arr, lo, mid)",                  # 3
    "    merge_sort(arr, mid+1, hi)",                # 4
    "    merge(arr, lo, mid, hi)",                   # 5
    "",                                              # 6
    "def merge(arr, lo, mid, hi):",                  # 7
    "    left ← arr[lo…mid]; right ← arr[mid+1…hi]",  # 8
    "    while both runs non-empty:",                # 9
    "        if left[i] ≤ right[j]: take left[i]",   # 10
    "        else: take right[j]",                   # 11
    "    copy whatever remains",                     # 12
]


def initial_input() -> Dict[str, Any]:
    return {"array": [38, 27, 43, 3, 9, 82, 10]}


def merge_sort(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb  = StepBuilder()
    arr = number_list(data.get("array"))

    yield sb.snapshot("init", code_line=0, description="Initialize the array", array=arr)

    def merge(lo: int, mid: int, hi: int) -> Generator[Step, None, None]:
        left  = arr[lo:mid + 1]
        right = arr[mid + 1:hi + 1]
        yield sb.snapshot(
            "merge-start", code_line=8,
            description=f"Merge [{lo}…{mid}] with [{mid + 1}…{hi}]",
            low=lo, mid=mid, high=hi, left=left, right=right, array=arr,
        )

        i = j = 0
        k = lo
        while i < len(left) and j < len(right):
            yield sb.snapshot(
                "compare", code_line=9,
                description=f"Compare left {left[i]} with right {right[j]}",
                left_index=i, right_index=j, left=left, right=right,
                low=lo, high=hi, array=arr,
            )
            if left[i] <= right[j]:
                arr[k] = left[i]
                source, line = "left", 10
                i += 1
            else:
                arr[k] = right[j]
                source, line = "right", 11
                j += 1
            yield sb.snapshot(
                "place", code_line=line,
                description=f"Place {arr[k]} from {source} run at index {k}",
                index=k, value=arr[k], source=source, left=left, right=right,
                low=lo, high=hi, array=arr,
            )
            k += 1

        for source, run, start in (("left", left, i), ("right", right, j)):
            for value in run[start:]:
                arr[k] = value
                yield sb.snapshot(
                    "place", code_line=12,
                    description=f"Copy remaining {value} from {source} run to index {k}",
                    index=k, value=value, source=source, left=left, right=right,
                    low=lo, high=hi, array=arr,
                )
                k += 1

        yield sb.snapshot(
            "merged", code_line=5,
            description=f"Range [{lo}…{hi}] is merged",
            low=lo, high=hi, array=arr,
        )

    def sort(lo: int, hi: int) -> Generator[Step, None, None]:
        if lo >= hi:
            return
        mid = (lo + hi) // 2
        yield sb.snapshot(
            "split", code_line=2,
            description=f"Split [{lo}…{hi}] into [{lo}…{mid}] and [{mid + 1}…{hi}]",
            low=lo, mid=mid, high=hi, array=arr,
        )
        yield from sort(lo, mid)
        yield from sort(mid + 1, hi)
        yield from merge(lo, mid, hi)

    yield from sort(0, len(arr) - 1)

    yield sb.snapshot("complete", code_line=5, description="Array is fully sorted!", array=arr)


def validate(data: Dict[str, Any]) -> Validation:
    return validate_array_input(data)
