"""
rat_maze.py — Rat in a Maze (backtracking)
===========================================
Find a path from the top-left to the bottom-right cell of a size×size
maze, where 1 = open and 0 = wall.  Moves are tried in the order
right, down, left, up.

Kinds: init, try-cell, move, blocked, destination-reached, backtrack,
complete (`solved`, `solution` path grid).
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import (
    as_list,
    first_failure,
    is_int,
    require_int_in_range,
    require_keys,
    require_square_grid,
)

MIN_SIZE = 2
MAX_SIZE = 8
MOVES = ((0, 1, "right"), (1, 0, "down"), (0, -1, "left"), (-1, 0, "up"))

PSEUDOCODE: List[str] = [
    "def solve(x, y):",                            # 0
    "    if (x, y) is the exit: return True",       # 1
    "    if not safe(x, y): return False",          # 2
    "    mark (x, y) on path",                      # 3
    "    for (dx, dy) in right, down, left, up:",   # 4
    "        if solve(x + dx, y + dy):",            # 5
    "            return True",                      # 6
    "    unmark (x, y)  // backtrack",              # 7
    "    return False",                             # 8
]

DEFAULT_MAZE = [
    [1, 0, 0, 0, 0],
    [1, 1, 0, 1, 0],
    [0, 1, 0, 0, 0],
    [0, 1, 1, 1, 0],
    [0, 0, 0, 1, 1],
]


def initial_input() -> Dict[str, Any]:
    return {"maze": [list(row) for row in DEFAULT_MAZE], "size": len(DEFAULT_MAZE)}


def rat_maze(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb   = StepBuilder()
    raw  = as_list(data.get("maze"))
    n    = data.get("size")
    n    = min(n if is_int(n) and n > 0 else len(raw), MAX_SIZE)
    # anything missing or malformed is a wall
    maze = [
        [
            1 if r < len(raw) and isinstance(raw[r], list) and c < len(raw[r]) and raw[r][c] == 1
            else 0
            for c in range(n)
        ]
        for r in range(n)
    ]
    solution = [[0] * n for _ in range(n)]
    visited  = [[False] * n for _ in range(n)]

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Starting Rat in a Maze ({n}×{n} grid)",
        maze=maze, solution=solution, visited=visited, size=n,
    )

    def safe(x: int, y: int) -> bool:
        return 0 <= x < n and 0 <= y < n and maze[x][y] == 1 and not visited[x][y]

    def solve(x: int, y: int) -> Generator[Step, None, bool]:
        yield sb.snapshot(
            "try-cell", code_line=0,
            description=f"Trying cell ({x}, {y})",
            maze=maze, solution=solution, visited=visited, size=n, x=x, y=y,
        )

        if x == n - 1 and y == n - 1 and maze[x][y] == 1:
            solution[x][y] = 1
            visited[x][y] = True
            yield sb.snapshot(
                "destination-reached", code_line=1,
                description=f"Destination reached at ({x}, {y})!",
                maze=maze, solution=solution, visited=visited, size=n, x=x, y=y,
            )
            return True

        if not safe(x, y):
            yield sb.snapshot(
                "blocked", code_line=2,
                description=f"Cell ({x}, {y}) is blocked, outside the maze or already visited",
                maze=maze, solution=solution, visited=visited, size=n, x=x, y=y,
            )
            return False

        solution[x][y] = 1
        visited[x][y] = True
        yield sb.snapshot(
            "move", code_line=3,
            description=f"Moving to ({x}, {y})",
            maze=maze, solution=solution, visited=visited, size=n, x=x, y=y,
        )

        for dx, dy, _ in MOVES:
            if (yield from solve(x + dx, y + dy)):
                return True

        solution[x][y] = 0
        yield sb.snapshot(
            "backtrack", code_line=7,
            description=f"Backtracking from ({x}, {y})",
            maze=maze, solution=solution, visited=visited, size=n, x=x, y=y,
        )
        return False

    solved = False
    if n > 0 and maze[0][0] == 1:
        solved = yield from solve(0, 0)

    yield sb.snapshot(
        "complete", code_line=6 if solved else 8,
        description="Path found!" if solved else "No path exists",
        maze=maze, solution=solution, visited=visited, size=n, solved=solved,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "maze", "size"),
        lambda: require_int_in_range(data["size"], "Maze size", MIN_SIZE, MAX_SIZE),
        lambda: require_square_grid(data["maze"], data["size"], "Maze", allowed=(0, 1)),
    )
