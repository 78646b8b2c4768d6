"""
optimal_merge.py — Optimal Merge Pattern (greedy, min-heap)
============================================================
Repeatedly pops the two smallest files off a heap, merges them and
pushes the merged size back.  Each merge costs the merged size.

Kinds: init, pick, merge, complete (`total_cost`, `merges`).
"""

import heapq
from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import first_failure, number_list, require_keys, require_number_list

MAX_FILES = 12

PSEUDOCODE: List[str] = [
    "def optimal_merge(files):",                 # 0
    "    heap ← min-heap(files)",                 # 1
    "    while len(heap) > 1:",                   # 2
    "        a ← pop(heap); b ← pop(heap)",       # 3
    "        cost += a + b",                      # 4
    "        push(heap, a + b)",                  # 5
    "    return cost",                            # 6
]


def initial_input() -> Dict[str, Any]:
    return {"files": [20, 30, 10, 5, 30]}


def optimal_merge(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb    = StepBuilder()
    files = number_list(data.get("files"))
    heap  = list(files)
    heapq.heapify(heap)
    total = 0
    merges: List[Dict[str, Any]] = []

    yield sb.snapshot(
        "init", code_line=1,
        description=f"Build a min-heap from {len(files)} file size(s)",
        files=files, heap=sorted(heap), total_cost=total, merges=merges,
    )

    while len(heap) > 1:
        a = heapq.heappop(heap)
        b = heapq.heappop(heap)
        yield sb.snapshot(
            "pick", code_line=3,
            description=f"Pick the two smallest files: {a} and {b}",
            first=a, second=b, heap=sorted(heap), total_cost=total, merges=merges,
        )

        merged = a + b
        total += merged
        heapq.heappush(heap, merged)
        merges.append({"first": a, "second": b, "merged": merged})
        yield sb.snapshot(
            "merge", code_line=5,
            description=f"Merge {a} + {b} = {merged}, total cost {total}",
            first=a, second=b, merged=merged, heap=sorted(heap),
            total_cost=total, merges=merges,
        )

    yield sb.snapshot(
        "complete", code_line=6,
        description=f"Minimum total merge cost: {total}",
        files=files, heap=sorted(heap), total_cost=total, merges=merges,
    )


def validate(data: Dict[str, Any]) -> Validation:

    def sizes_ok() -> Validation:
        if not all(f > 0 for f in data["files"]):
            return Validation.fail("File sizes must be positive")
        if len(data["files"]) < 2:
            return Validation.fail("Provide at least two files to merge")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "files"),
        lambda: require_number_list(data["files"], "Files", MAX_FILES),
        sizes_ok,
    )
