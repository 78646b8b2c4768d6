"""
fractional_knapsack.py — Fractional Knapsack (greedy)
======================================================
Items are ranked by value/weight ratio (ties keep input order) and
taken whole while they fit; the first item that does not fit is taken
fractionally and the rest are skipped.

`fractions[i]` is the share of item i in the knapsack (0 … 1).  Items
without a positive weight and a numeric value are dropped before indexing.

Kinds: init, sort-by-ratio, take-item, take-fraction, skip-item,
complete (`total_value`, `fractions`).
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import as_list, first_failure, is_number, require_keys, require_number

MAX_ITEMS = 10

PSEUDOCODE: List[str] = [
    "def fractional_knapsack(items, W):",              # 0
    "    sort items by value / weight, descending",     # 1
    "    for item in items:",                           # 2
    "        if W == 0: skip",                          # 3
    "        if item.weight ≤ W:",                      # 4
    "            take all; W -= item.weight",           # 5
    "        else:",                                    # 6
    "            take W / item.weight of it; W ← 0",    # 7
    "    return total value",                           # 8
]


def initial_input() -> Dict[str, Any]:
    return {"weights": [10, 20, 30], "values": [60, 100, 120], "capacity": 50}


def fractional_knapsack(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb       = StepBuilder()
    # items without a positive weight and a numeric value are dropped
    pairs = [
        (wt, val) for wt, val in zip(as_list(data.get("weights")), as_list(data.get("values")))
        if is_number(wt) and wt > 0 and is_number(val)
    ]
    weights  = [wt for wt, _ in pairs]
    values   = [val for _, val in pairs]
    capacity = data.get("capacity")
    capacity = capacity if is_number(capacity) and capacity > 0 else 0
    n        = len(pairs)

    items = [
        {"index": i, "weight": weights[i], "value": values[i],
         "ratio": values[i] / weights[i]}
        for i in range(n)
    ]
    fractions: List[float] = [0.0] * n
    remaining = capacity
    total = 0.0

    yield sb.snapshot(
        "init", code_line=0,
        description=f"{n} item(s), knapsack capacity {capacity}",
        items=items, capacity=capacity, remaining=remaining, fractions=fractions,
    )

    order = sorted(items, key=lambda it: -it["ratio"])
    yield sb.snapshot(
        "sort-by-ratio", code_line=1,
        description="Sorted by value/weight: " + ", ".join(
            f"item {it['index'] + 1} ({it['ratio']:.2f})" for it in order
        ),
        items=items, order=[it["index"] for it in order],
        capacity=capacity, remaining=remaining, fractions=fractions,
    )

    for item in order:
        i = item["index"]
        if remaining <= 0:
            yield sb.snapshot(
                "skip-item", code_line=3,
                description=f"Knapsack full, skip item {i + 1}",
                item=i, items=items, remaining=remaining,
                fractions=fractions, total_value=total,
            )
        elif item["weight"] <= remaining:
            fractions[i] = 1.0
            remaining -= item["weight"]
            total += item["value"]
            yield sb.snapshot(
                "take-item", code_line=5,
                description=f"Take all of item {i + 1} (weight {item['weight']}), remaining capacity {remaining}",
                item=i, items=items, remaining=remaining,
                fractions=fractions, total_value=total,
            )
        else:
            share = remaining / item["weight"]
            fractions[i] = share
            total += item["value"] * share
            remaining = 0
            yield sb.snapshot(
                "take-fraction", code_line=7,
                description=f"Take {share:.2f} of item {i + 1}, knapsack is now full",
                item=i, fraction=share, items=items, remaining=remaining,
                fractions=fractions, total_value=total,
            )

    yield sb.snapshot(
        "complete", code_line=8,
        description=f"Maximum value: {total:.2f}",
        items=items, capacity=capacity, remaining=remaining,
        fractions=fractions, total_value=total,
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
        if not all(is_number(w) and w > 0 for w in weights):
            return Validation.fail("Weights must be positive numbers")
        if not all(is_number(v) and v >= 0 for v in values):
            return Validation.fail("Values must be non-negative numbers")
        return Validation.ok()

    def capacity_ok() -> Validation:
        result = require_number(data["capacity"], "Capacity")
        if result and data["capacity"] <= 0:
            return Validation.fail("Capacity must be positive")
        return result

    return first_failure(
        lambda: require_keys(data, "weights", "values", "capacity"),
        items_ok,
        capacity_ok,
    )
