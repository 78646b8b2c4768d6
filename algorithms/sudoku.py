"""
sudoku.py — Sudoku Solver (backtracking)
=========================================
Classic row-major backtracking on a fixed 9×9 board, 0 = empty.

Kinds: init, find-empty, try-number, check-valid, place-number,
backtrack, complete (`solved`, `budget_exhausted`).

`fixed` marks the givens so the renderer can style them; it is a tuple
of tuples, which makes it immutable and lets the per-step deep copy
share it safely.

A hard TRIAL_BUDGET (number of candidate digits tried) bounds the trace
on pathological puzzles; when it runs out the trace ends normally with
`solved=False`.
"""

from typing import Any, Dict, Generator, List, Tuple

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import as_list, first_failure, require_keys, require_square_grid

SIZE = 9
BOX = 3
TRIAL_BUDGET = 10_000

PSEUDOCODE: List[str] = [
    "def solve(board):",                          # 0
    "    cell ← first empty cell",                 # 1
    "    if none: return True",                    # 2
    "    for num in 1 … 9:",                       # 3
    "        if valid(cell, num):",                # 4
    "            board[cell] ← num",               # 5
    "            if solve(board): return True",    # 6
    "            board[cell] ← 0  // backtrack",   # 7
    "    return False",                            # 8
]

DEFAULT_PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


def initial_input() -> Dict[str, Any]:
    return {"board": [list(row) for row in DEFAULT_PUZZLE]}


def is_valid(board: List[List[int]], row: int, col: int, num: int) -> bool:
    """`num` does not already appear in the row, column or 3×3 box (ignoring (row, col))."""
    for i in range(SIZE):
        if i != col and board[row][i] == num:
            return False
        if i != row and board[i][col] == num:
            return False
    box_row, box_col = row - row % BOX, col - col % BOX
    for r in range(box_row, box_row + BOX):
        for c in range(box_col, box_col + BOX):
            if (r, c) != (row, col) and board[r][c] == num:
                return False
    return True


def _first_empty(board: List[List[int]]) -> Tuple[int, int]:
    for r in range(SIZE):
        for c in range(SIZE):
            if board[r][c] == 0:
                return r, c
    return -1, -1


def sudoku(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb = StepBuilder()
    raw = as_list(data.get("board"))
    # clamp malformed boards into a 9×9 grid of 0…9
    board = [
        [
            raw[r][c] if r < len(raw) and isinstance(raw[r], list) and c < len(raw[r])
            and isinstance(raw[r][c], int) and 0 <= raw[r][c] <= 9 else 0
            for c in range(SIZE)
        ]
        for r in range(SIZE)
    ]
    fixed = tuple(tuple(cell != 0 for cell in row) for row in board)
    trials = 0

    yield sb.snapshot("init", code_line=0, description="Starting Sudoku Solver", board=board, fixed=fixed)

    def solve() -> Generator[Step, None, bool]:
        nonlocal trials
        row, col = _first_empty(board)
        if row < 0:
            return True

        yield sb.snapshot(
            "find-empty", code_line=1,
            description=f"Found empty cell at ({row}, {col})",
            board=board, fixed=fixed, row=row, col=col,
        )

        for num in range(1, SIZE + 1):
            if trials >= TRIAL_BUDGET:
                return False
            trials += 1

            yield sb.snapshot(
                "try-number", code_line=3,
                description=f"Trying {num} at ({row}, {col})",
                board=board, fixed=fixed, row=row, col=col, num=num,
            )

            valid = is_valid(board, row, col, num)
            yield sb.snapshot(
                "check-valid", code_line=4,
                description=(
                    f"{num} is valid at ({row}, {col})" if valid
                    else f"{num} conflicts at ({row}, {col})"
                ),
                board=board, fixed=fixed, row=row, col=col, num=num, valid=valid,
            )
            if not valid:
                continue

            board[row][col] = num
            yield sb.snapshot(
                "place-number", code_line=5,
                description=f"Placed {num} at ({row}, {col})",
                board=board, fixed=fixed, row=row, col=col, num=num,
            )

            if (yield from solve()):
                return True

            board[row][col] = 0
            yield sb.snapshot(
                "backtrack", code_line=7,
                description=f"Backtracking from ({row}, {col})",
                board=board, fixed=fixed, row=row, col=col,
            )

        return False

    solved = False
    if _givens_consistent(board):
        solved = yield from solve()

    budget_exhausted = not solved and trials >= TRIAL_BUDGET
    if solved:
        summary = "Sudoku solved!"
    elif budget_exhausted:
        summary = f"Stopped after {TRIAL_BUDGET} trials without a solution"
    else:
        summary = "No solution exists"
    yield sb.snapshot(
        "complete", code_line=2 if solved else 8,
        description=summary,
        board=board, fixed=fixed, solved=solved, budget_exhausted=budget_exhausted, trials=trials,
    )


def _givens_consistent(board: List[List[int]]) -> bool:
    return all(
        board[r][c] == 0 or is_valid(board, r, c, board[r][c])
        for r in range(SIZE) for c in range(SIZE)
    )


def validate(data: Dict[str, Any]) -> Validation:

    def givens_ok() -> Validation:
        if not _givens_consistent(data["board"]):
            return Validation.fail("The given digits conflict with each other")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "board"),
        lambda: require_square_grid(data["board"], SIZE, "Board", allowed=range(0, 10)),
        givens_ok,
    )
