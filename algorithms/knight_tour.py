"""
knight_tour.py — Knight's Tour (backtracking + Warnsdorff)
===========================================================
Candidate moves are ordered by Warnsdorff's rule: fewest onward moves
first (ties keep the fixed move order, so the trace is deterministic).

The search is capped by STEP_BUDGET counted recursive expansions.  On
boards where no tour exists from the start square the budget runs out
and the trace ends with `solved=False` instead of exploring an
exponential tree.

`board[x][y]` is the move number that reached the square, -1 if unvisited.

Kinds: init, start-position, try-move, place-knight, backtrack,
complete (`solved`, `budget_exhausted`).
"""

from typing import Any, Dict, Generator, List, Tuple

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import first_failure, is_int, require_int_in_range, require_keys

MIN_SIZE = 5
MAX_SIZE = 8
STEP_BUDGET = 500

KNIGHT_MOVES: Tuple[Tuple[int, int], ...] = (
    (2, 1), (1, 2), (-1, 2), (-2, 1), (-2, -1), (-1, -2), (1, -2), (2, -1),
)

PSEUDOCODE: List[str] = [
    "def tour(x, y, move):",                           # 0
    "    if move == n²: return True",                   # 1
    "    if budget exhausted: return False",            # 2
    "    for (nx, ny) in moves sorted by onward degree:",  # 3
    "        board[nx][ny] ← move",                     # 4
    "        if tour(nx, ny, move + 1): return True",   # 5
    "        board[nx][ny] ← -1  // backtrack",         # 6
    "    return False",                                 # 7
    "",                                                 # 8
    "board[start] ← 0; tour(start, 1)",                 # 9
]


def initial_input() -> Dict[str, Any]:
    return {"size": 5, "start_x": 0, "start_y": 0}


def knight_tour(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb = StepBuilder()
    n  = data.get("size")
    n  = min(n, MAX_SIZE) if is_int(n) and n > 0 else 0
    start_x = data.get("start_x", 0)
    start_y = data.get("start_y", 0)
    start_x = min(max(start_x if is_int(start_x) else 0, 0), max(n - 1, 0))
    start_y = min(max(start_y if is_int(start_y) else 0, 0), max(n - 1, 0))
    board: List[List[int]] = [[-1] * n for _ in range(n)]
    budget = STEP_BUDGET

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Starting Knight's Tour on {n}×{n} board from ({start_x}, {start_y})",
        board=board, size=n, start_x=start_x, start_y=start_y,
    )

    def free(x: int, y: int) -> bool:
        return 0 <= x < n and 0 <= y < n and board[x][y] == -1

    def onward_degree(x: int, y: int) -> int:
        return sum(1 for dx, dy in KNIGHT_MOVES if free(x + dx, y + dy))

    def ordered_moves(x: int, y: int) -> List[Tuple[int, int, int]]:
        candidates = [
            (x + dx, y + dy, onward_degree(x + dx, y + dy))
            for dx, dy in KNIGHT_MOVES
            if free(x + dx, y + dy)
        ]
        return sorted(candidates, key=lambda m: m[2])

    def tour(x: int, y: int, move: int) -> Generator[Step, None, bool]:
        nonlocal budget
        if move == n * n:
            return True
        if budget <= 0:
            return False
        budget -= 1

        for nx, ny, degree in ordered_moves(x, y):
            yield sb.snapshot(
                "try-move", code_line=3,
                description=f"Trying move {move} to ({nx}, {ny}) - {degree} onward moves available",
                board=board, size=n, current_x=x, current_y=y, next_x=nx, next_y=ny,
                move_count=move, access_count=degree, budget_left=budget,
            )

            board[nx][ny] = move
            yield sb.snapshot(
                "place-knight", code_line=4,
                description=f"Placed knight at ({nx}, {ny}) - move {move}",
                board=board, size=n, x=nx, y=ny, move_count=move,
            )

            if (yield from tour(nx, ny, move + 1)):
                return True

            board[nx][ny] = -1
            yield sb.snapshot(
                "backtrack", code_line=6,
                description=f"Backtracking from ({nx}, {ny})",
                board=board, size=n, x=nx, y=ny, move_count=move,
            )

        return False

    solved = False
    if n > 0:
        board[start_x][start_y] = 0
        yield sb.snapshot(
            "start-position", code_line=9,
            description=f"Starting position set at ({start_x}, {start_y})",
            board=board, size=n, x=start_x, y=start_y,
        )
        solved = yield from tour(start_x, start_y, 1)

    budget_exhausted = not solved and budget <= 0
    if solved:
        summary = "Knight's Tour complete!"
    elif budget_exhausted:
        summary = "No complete tour found within the step budget"
    else:
        summary = "No complete tour exists from this square"
    yield sb.snapshot(
        "complete", code_line=1 if solved else 7,
        description=summary,
        board=board, size=n, solved=solved, budget_exhausted=budget_exhausted,
    )


def validate(data: Dict[str, Any]) -> Validation:

    def start_ok() -> Validation:
        n = data["size"]
        x, y = data["start_x"], data["start_y"]
        if not (is_int(x) and is_int(y) and 0 <= x < n and 0 <= y < n):
            return Validation.fail("Starting position must be within the board")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "size", "start_x", "start_y"),
        lambda: require_int_in_range(data["size"], "Board size", MIN_SIZE, MAX_SIZE),
        start_ok,
    )
