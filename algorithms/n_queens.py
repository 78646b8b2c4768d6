"""
n_queens.py — N-Queens (backtracking)
======================================
`board[row]` holds the column of the queen in that row, or -1.

Yields one Step per trial, per safety check, per placement and per
backtrack:
    init, try-row, try-col, check-safe, place-queen, backtrack,
    solution-found | no-solution, complete (board, solution_found)
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import first_failure, is_int, require_int_in_range, require_keys

MIN_N = 1
MAX_N = 8


PSEUDOCODE: List[str] = [
    "def solve_n_queens(n):",                     # 0
    "    board ← [-1] * n",                        # 1
    "    return place(0)",                         # 2
    "",                                            # 3
    "def place(row):",                             # 4
    "    if row == n: return True",                # 5
    "    for col in 0 … n-1:",                     # 6
    "        if is_safe(row, col):",               # 7
    "            board[row] ← col",                # 8
    "            if place(row + 1): return True",  # 9
    "            board[row] ← -1  // backtrack",   # 10
    "    return False",                            # 11
]


def initial_input() -> Dict[str, Any]:
    return {"n": 4}


def is_safe(board: List[int], row: int, col: int) -> bool:
    """No queen in rows 0…row-1 shares the column or a diagonal."""
    for r in range(row):
        c = board[r]
        if c == col or abs(c - col) == abs(r - row):
            return False
    return True


def n_queens(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb = StepBuilder()
    n  = data.get("n")
    n  = min(n, MAX_N) if is_int(n) and n > 0 else 0
    board: List[int] = [-1] * n

    yield sb.snapshot("init", code_line=1, description=f"Solving {n}-Queens problem", n=n, board=board)

    def place(row: int) -> Generator[Step, None, bool]:
        if row == n:
            yield sb.snapshot(
                "solution-found", code_line=5, description="Solution found!",
                board=board, n=n,
            )
            return True

        yield sb.snapshot(
            "try-row", code_line=6,
            description=f"Trying to place queen in row {row}",
            row=row, board=board, n=n,
        )

        for col in range(n):
            yield sb.snapshot(
                "try-col", code_line=6,
                description=f"Try column {col} for row {row}",
                row=row, col=col, board=board, n=n,
            )

            safe = is_safe(board, row, col)
            yield sb.snapshot(
                "check-safe", code_line=7,
                description=(
                    f"Position ({row}, {col}) is safe" if safe
                    else f"Position ({row}, {col}) is not safe (attacks existing queen)"
                ),
                row=row, col=col, safe=safe, board=board, n=n,
            )
            if not safe:
                continue

            board[row] = col
            yield sb.snapshot(
                "place-queen", code_line=8,
                description=f"Place queen at ({row}, {col})",
                row=row, col=col, board=board, n=n,
            )

            if (yield from place(row + 1)):
                return True

            board[row] = -1
            yield sb.snapshot(
                "backtrack", code_line=10,
                description=f"Backtrack: remove queen from ({row}, {col})",
                row=row, col=col, board=board, n=n,
            )

        return False

    solution_found = False
    if n > 0:
        solution_found = yield from place(0)

    if not solution_found:
        yield sb.snapshot(
            "no-solution", code_line=11,
            description=f"No solution found for {n}-Queens",
            board=board, n=n,
        )

    yield sb.snapshot(
        "complete", code_line=2,
        description=(
            "Algorithm complete - solution found!" if solution_found
            else "Algorithm complete - no solution exists"
        ),
        board=board, n=n, solution_found=solution_found,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "n"),
        lambda: require_int_in_range(data["n"], "N", MIN_N, MAX_N),
    )
