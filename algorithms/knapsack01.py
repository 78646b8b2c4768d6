"""
knapsack01.py — 0/1 Knapsack (bottom-up DP)
============================================
dp[i][w] = best value using the first i items with capacity w.

Two phases:
  1. Fill the table row by row; every cell write is a Step
     ("compare" announces the cell, then "update" or "skip" writes it).
  2. Walk back from dp[n][capacity] to recover the chosen items
     ("reconstruct-take" / "reconstruct-skip"), then "complete".
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import (
    as_list,
    first_failure,
    is_int,
    is_number,
    require_int_in_range,
    require_keys,
)

MAX_ITEMS = 8
MAX_CAPACITY = 20

PSEUDOCODE: List[str] = [
    "def knapsack(weights, values, W):",                       # 0
    "    dp ← (n+1) × (W+1) zeros",                             # 1
    "    for i in 1 … n:",                                      # 2
    "        for w in 0 … W:",                                  # 3
    "            if weights[i-1] > w:",                         # 4
    "                dp[i][w] ← dp[i-1][w]",                    # 5
    "            else:",                                        # 6
    "                dp[i][w] ← max(dp[i-1][w],",               # 7
    "                    dp[i-1][w-weights[i-1]] + values[i-1])",  # 8
    "    // reconstruct",                                       # 9
    "    w ← W",                                                # 10
    "    for i in n … 1:",                                      # 11
    "        if dp[i][w] ≠ dp[i-1][w]: take item i-1; w -= weights[i-1]",  # 12
    "    return dp[n][W]",                                      # 13
]


def initial_input() -> Dict[str, Any]:
    return {"weights": [2, 3, 4, 5], "values": [3, 4, 5, 6], "capacity": 5}


def knapsack01(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb       = StepBuilder()
    # items without a positive integer weight and a numeric value are dropped
    pairs = [
        (wt, val) for wt, val in zip(as_list(data.get("weights")), as_list(data.get("values")))
        if is_int(wt) and wt > 0 and is_number(val)
    ]
    weights  = [wt for wt, _ in pairs]
    values   = [val for _, val in pairs]
    capacity = data.get("capacity")
    capacity = min(capacity, MAX_CAPACITY) if is_int(capacity) and capacity >= 0 else 0
    n        = len(pairs)

    dp = [[0] * (capacity + 1) for _ in range(n + 1)]
    items = [{"index": i, "weight": weights[i], "value": values[i]} for i in range(n)]

    yield sb.snapshot(
        "init", code_line=1,
        description=f"Initialize DP table for {n} items with capacity {capacity}",
        dp=dp, weights=weights, values=values, capacity=capacity, n=n, items=items,
    )

    for i in range(1, n + 1):
        wt, val = weights[i - 1], values[i - 1]
        for w in range(capacity + 1):
            yield sb.snapshot(
                "compare", code_line=4,
                description=f"Item {i}: weight={wt}, value={val}. Capacity w={w}",
                dp=dp, i=i, w=w, item_weight=wt, item_value=val,
                weights=weights, values=values, capacity=capacity,
            )

            if wt <= w:
                include = dp[i - 1][w - wt] + val
                exclude = dp[i - 1][w]
                dp[i][w] = max(include, exclude)
                chosen = "include" if include > exclude else "exclude"
                yield sb.snapshot(
                    "update", code_line=8 if chosen == "include" else 7,
                    description=(
                        f"Include: {include}, Exclude: {exclude}. Choose {chosen} "
                        f"→ dp[{i}][{w}] = {dp[i][w]}"
                    ),
                    dp=dp, i=i, w=w, include=include, exclude=exclude, chosen=chosen,
                    weights=weights, values=values, capacity=capacity,
                )
            else:
                dp[i][w] = dp[i - 1][w]
                yield sb.snapshot(
                    "skip", code_line=5,
                    description=f"Item {i} too heavy ({wt} > {w}). dp[{i}][{w}] = {dp[i][w]}",
                    dp=dp, i=i, w=w, weights=weights, values=values, capacity=capacity,
                )

    # ==============================================================
    # RECONSTRUCTION
    # ==============================================================
    selected: List[int] = []
    w = capacity
    for i in range(n, 0, -1):
        if dp[i][w] != dp[i - 1][w]:
            selected.append(i - 1)
            w -= weights[i - 1]
            yield sb.snapshot(
                "reconstruct-take", code_line=12,
                description=f"dp[{i}][{w + weights[i - 1]}] ≠ dp[{i - 1}][{w + weights[i - 1]}] → take item {i}",
                dp=dp, i=i, w=w + weights[i - 1], remaining=w, selected_items=sorted(selected),
                weights=weights, values=values, capacity=capacity,
            )
        else:
            yield sb.snapshot(
                "reconstruct-skip", code_line=12,
                description=f"dp[{i}][{w}] = dp[{i - 1}][{w}] → item {i} not taken",
                dp=dp, i=i, w=w, remaining=w, selected_items=sorted(selected),
                weights=weights, values=values, capacity=capacity,
            )

    selected.sort()
    yield sb.snapshot(
        "complete", code_line=13,
        description=(
            f"Maximum value: {dp[n][capacity]}. Selected items: "
            f"{', '.join(str(i + 1) for i in selected) or 'none'}"
        ),
        dp=dp, max_value=dp[n][capacity], selected_items=selected,
        weights=weights, values=values, capacity=capacity,
    )


def validate(data: Dict[str, Any]) -> Validation:

    def items_ok() -> Validation:
        weights, values = data["weights"], data["values"]
        if not isinstance(weights, list) or not isinstance(values, list):
            return Validation.fail("Weights and values must be lists")
        if len(weights) != len(values):
            return Validation.fail("Weights and values must have same length")
        if len(weights) == 0 or len(weights) > MAX_ITEMS:
            return Validation.fail(f"Number of items must be between 1 and {MAX_ITEMS}")
        if not all(is_int(w) and w > 0 for w in weights):
            return Validation.fail("Weights must be positive integers")
        if not all(is_number(v) and v >= 0 for v in values):
            return Validation.fail("Values must be non-negative numbers")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "weights", "values", "capacity"),
        items_ok,
        lambda: require_int_in_range(data["capacity"], "Capacity", 1, MAX_CAPACITY),
    )
