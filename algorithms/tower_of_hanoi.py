"""
tower_of_hanoi.py — Tower of Hanoi
===================================
Moves `disks` disks from rod A to rod C using rod B.  `rods` in every
payload maps rod name → list of disk sizes, bottom first.

Kinds: init, recurse, move-disk, complete (`moves`, `rods`).
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import first_failure, is_int, require_int_in_range, require_keys

MIN_DISKS = 1
MAX_DISKS = 6

PSEUDOCODE: List[str] = [
    "def hanoi(n, src, dst, via):",          # 0
    "    if n == 0: return",                  # 1
    "    hanoi(n - 1, src, via, dst)",        # 2
    "    move disk n from src to dst",        # 3
    "    hanoi(n - 1, via, dst, src)",        # 4
]


def initial_input() -> Dict[str, Any]:
    return {"disks": 3}


def tower_of_hanoi(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb    = StepBuilder()
    disks = data.get("disks")
    disks = min(disks, MAX_DISKS) if is_int(disks) and disks > 0 else 0
    rods: Dict[str, List[int]] = {"A": list(range(disks, 0, -1)), "B": [], "C": []}
    moves = 0

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Move {disks} disk(s) from rod A to rod C",
        rods=rods, disks=disks,
    )

    def hanoi(n: int, src: str, dst: str, via: str, depth: int) -> Generator[Step, None, None]:
        nonlocal moves
        if n == 0:
            return
        yield sb.snapshot(
            "recurse", code_line=2,
            description=f"Move {n} disk(s) from {src} to {dst} using {via}",
            n=n, source=src, target=dst, via=via, depth=depth, rods=rods, moves=moves,
        )
        yield from hanoi(n - 1, src, via, dst, depth + 1)

        disk = rods[src].pop()
        rods[dst].append(disk)
        moves += 1
        yield sb.snapshot(
            "move-disk", code_line=3,
            description=f"Move disk {disk} from {src} to {dst}",
            disk=disk, source=src, target=dst, depth=depth, rods=rods, moves=moves,
        )

        yield from hanoi(n - 1, via, dst, src, depth + 1)

    yield from hanoi(disks, "A", "C", "B", 0)

    yield sb.snapshot(
        "complete", code_line=0,
        description=f"All disks moved to rod C in {moves} move(s)",
        rods=rods, disks=disks, moves=moves,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "disks"),
        lambda: require_int_in_range(data["disks"], "Number of disks", MIN_DISKS, MAX_DISKS),
    )
