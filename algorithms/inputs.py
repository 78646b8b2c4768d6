"""
inputs.py — Input Generators
=============================
Runners are deterministic; the randomness used to build battle and
practice inputs lives here, behind an explicit `random.Random(seed)`
so a given seed always reproduces the same array.

    battle_input("nearly-sorted", 20, seed=7)  →  {"array": [...]}
"""

import random
from typing import Any, Dict, List, Optional

BATTLE_INPUT_KINDS = ("random", "sorted", "reverse", "nearly-sorted")

MAX_VALUE = 100


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


def random_array(size: int, seed: Optional[int] = None) -> List[int]:
    """`size` integers drawn uniformly from 1 … 100."""
    rng = _rng(seed)
    return [rng.randint(1, MAX_VALUE) for _ in range(size)]


def sorted_array(size: int) -> List[int]:
    """Evenly spread ascending values in 1 … 100."""
    return [(i * MAX_VALUE) // size + 1 for i in range(size)]


def reverse_array(size: int) -> List[int]:
    return sorted_array(size)[::-1]


def nearly_sorted_array(size: int, seed: Optional[int] = None) -> List[int]:
    """sorted_array with size // 5 random position swaps."""
    rng = _rng(seed)
    arr = sorted_array(size)
    for _ in range(size // 5):
        i, j = rng.randrange(size), rng.randrange(size)
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def battle_input(kind: str, size: int, seed: Optional[int] = None) -> Dict[str, Any]:
    """Shared `{"array": …}` input for a battle.  Unknown kinds fall back to random."""
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    if kind == "sorted":
        return {"array": sorted_array(size)}
    if kind == "reverse":
        return {"array": reverse_array(size)}
    if kind == "nearly-sorted":
        return {"array": nearly_sorted_array(size, seed)}
    return {"array": random_array(size, seed)}
