"""
fibonacci.py — Fibonacci (bottom-up DP)
========================================
Tabulates dp[0…n].  Every cell write is its own Step.

Kinds: init, base-case, init-dp, compute, store, complete (`result`, `dp`).
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import first_failure, is_int, require_int_in_range, require_keys

MAX_N = 40

PSEUDOCODE: List[str] = [
    "def fib(n):",                             # 0
    "    if n ≤ 1:",                            # 1
    "        return n",                         # 2
    "    dp ← [0] * (n + 1)",                   # 3
    "    dp[1] ← 1",                            # 4
    "    for i in 2 … n:",                      # 5
    "        dp[i] ← dp[i-1] + dp[i-2]",        # 6
    "    return dp[n]",                         # 7
]


def initial_input() -> Dict[str, Any]:
    return {"n": 10}


def fibonacci(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb = StepBuilder()
    n  = data.get("n")
    n  = min(n, MAX_N) if is_int(n) and n >= 0 else 0

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Computing Fibonacci({n}) using dynamic programming",
        n=n, dp=[],
    )

    if n <= 1:
        yield sb.snapshot(
            "base-case", code_line=2,
            description=f"Base case: Fibonacci({n}) = {n}",
            n=n, result=n, dp=[n],
        )
        yield sb.snapshot(
            "complete", code_line=2,
            description=f"Result: Fibonacci({n}) = {n}",
            n=n, result=n, dp=[n],
        )
        return

    dp = [0] * (n + 1)
    dp[1] = 1
    yield sb.snapshot(
        "init-dp", code_line=4,
        description="Initialize DP table: dp[0] = 0, dp[1] = 1",
        n=n, dp=dp,
    )

    for i in range(2, n + 1):
        yield sb.snapshot(
            "compute", code_line=6,
            description=f"Computing dp[{i}] = dp[{i - 1}] + dp[{i - 2}] = {dp[i - 1]} + {dp[i - 2]}",
            n=n, i=i, prev1=dp[i - 1], prev2=dp[i - 2], dp=dp,
        )
        dp[i] = dp[i - 1] + dp[i - 2]
        yield sb.snapshot(
            "store", code_line=6,
            description=f"Store dp[{i}] = {dp[i]}",
            n=n, i=i, value=dp[i], dp=dp,
        )

    yield sb.snapshot(
        "complete", code_line=7,
        description=f"Result: Fibonacci({n}) = {dp[n]}",
        n=n, result=dp[n], dp=dp,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "n"),
        lambda: require_int_in_range(data["n"], "N", 0, MAX_N),
    )
