"""
validation.py — Shared input checks
====================================
Small building blocks the runners compose in their validate_input().
Every helper returns a Validation and never raises: a malformed input
dict (missing keys, wrong types, NaN) is a normal outcome that the UI
shows to the user.

    from algorithms.validation import first_failure, require_number_list
    return first_failure(
        lambda: require_keys(data, "array"),
        lambda: require_number_list(data["array"], "Array"),
    )
"""

import math
from typing import Any, Callable, Iterable, List, Mapping, Optional

from algorithms.step import Validation


def is_number(value: Any) -> bool:
    """True for int/float that are finite.  bool is rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def as_list(value: Any) -> List[Any]:
    """`value` when it is a list, else an empty list."""
    return value if isinstance(value, list) else []


def number_list(value: Any) -> List[Any]:
    """The finite numbers of `value`, in order.  Runners build their working arrays with this."""
    return [v for v in as_list(value) if is_number(v)]


def first_failure(*checks: Callable[[], Validation]) -> Validation:
    """Run checks lazily in order, return the first failure (or ok)."""
    for check in checks:
        result = check()
        if not result.valid:
            return result
    return Validation.ok()


def require_mapping(data: Any) -> Validation:
    if not isinstance(data, Mapping):
        return Validation.fail("Input must be an object")
    return Validation.ok()


def require_keys(data: Any, *keys: str) -> Validation:
    if not isinstance(data, Mapping):
        return Validation.fail("Input must be an object")
    missing = [k for k in keys if k not in data]
    if missing:
        return Validation.fail(f"Missing field(s): {', '.join(missing)}")
    return Validation.ok()


def require_non_empty_list(value: Any, name: str) -> Validation:
    if not isinstance(value, list) or len(value) == 0:
        return Validation.fail(f"Please provide a non-empty {name.lower()}")
    return Validation.ok()


def require_number_list(value: Any, name: str, max_len: Optional[int] = None) -> Validation:
    """Non-empty list of finite numbers, optionally bounded in length."""
    result = require_non_empty_list(value, name)
    if not result:
        return result
    if not all(is_number(v) for v in value):
        return Validation.fail(f"All elements of {name.lower()} must be numbers")
    if max_len is not None and len(value) > max_len:
        return Validation.fail(f"{name} may contain at most {max_len} elements")
    return Validation.ok()


def require_sorted(values: Iterable[float], message: str) -> Validation:
    values = list(values)
    for prev, cur in zip(values, values[1:]):
        if cur < prev:
            return Validation.fail(message)
    return Validation.ok()


def require_number(value: Any, name: str) -> Validation:
    if not is_number(value):
        return Validation.fail(f"{name} must be a number")
    return Validation.ok()


def require_int_in_range(value: Any, name: str, low: int, high: int) -> Validation:
    if not is_int(value) or not (low <= value <= high):
        return Validation.fail(f"{name} must be an integer between {low} and {high}")
    return Validation.ok()


def require_square_grid(
    grid: Any,
    size: int,
    name: str,
    allowed: Optional[Iterable[int]] = None,
) -> Validation:
    """size×size list-of-lists of ints, each optionally drawn from `allowed`."""
    if not isinstance(grid, list) or len(grid) != size:
        return Validation.fail(f"{name} must be {size}x{size}")
    allowed_set = set(allowed) if allowed is not None else None
    for row in grid:
        if not isinstance(row, list) or len(row) != size:
            return Validation.fail(f"{name} must be {size}x{size}")
        for cell in row:
            if not is_int(cell):
                return Validation.fail(f"{name} cells must be integers")
            if allowed_set is not None and cell not in allowed_set:
                return Validation.fail(
                    f"{name} cells must be one of {sorted(allowed_set)}"
                )
    return Validation.ok()


def require_string_length(value: Any, name: str, low: int, high: int) -> Validation:
    if not isinstance(value, str) or not (low <= len(value) <= high):
        return Validation.fail(f"{name} must be {low}-{high} characters")
    return Validation.ok()


def require_same_length(a: Any, b: Any, message: str) -> Validation:
    if not isinstance(a, list) or not isinstance(b, list) or len(a) != len(b):
        return Validation.fail(message)
    return Validation.ok()


# ---------------------------------------------------------------------------
# Input shapes shared by several runners
# ---------------------------------------------------------------------------
MAX_ARRAY_LENGTH = 50
MAX_GRAPH_NODES  = 30


def validate_array_input(data: Any, max_len: int = MAX_ARRAY_LENGTH) -> Validation:
    """{"array": [numbers]} — the shape every sorting runner takes."""
    return first_failure(
        lambda: require_keys(data, "array"),
        lambda: require_number_list(data["array"], "Array", max_len),
    )


def validate_graph_input(data: Any) -> Validation:
    """{"nodes": [ids], "edges": [[u, v], …], "start_node": id} — BFS / DFS."""

    def nodes_ok() -> Validation:
        nodes = data["nodes"]
        result = require_non_empty_list(nodes, "Node list")
        if not result:
            return result
        if not all(isinstance(n, (int, str)) and not isinstance(n, bool) for n in nodes):
            return Validation.fail("Node ids must be integers or strings")
        if len(set(nodes)) != len(nodes):
            return Validation.fail("Node ids must be unique")
        if len(nodes) > MAX_GRAPH_NODES:
            return Validation.fail(f"Graph may have at most {MAX_GRAPH_NODES} nodes")
        return Validation.ok()

    def edges_ok() -> Validation:
        edges = data["edges"]
        if not isinstance(edges, list):
            return Validation.fail("Edges must be a list of [u, v] pairs")
        known = set(data["nodes"])
        for edge in edges:
            if not isinstance(edge, (list, tuple)) or len(edge) != 2:
                return Validation.fail("Edges must be a list of [u, v] pairs")
            if not all(isinstance(end, (int, str)) for end in edge):
                return Validation.fail("Edges must be a list of [u, v] pairs")
            if edge[0] not in known or edge[1] not in known:
                return Validation.fail(f"Edge {list(edge)} references an unknown node")
        return Validation.ok()

    def start_ok() -> Validation:
        start = data["start_node"]
        if not isinstance(start, (int, str)) or start not in set(data["nodes"]):
            return Validation.fail("Start node must be in the nodes list")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "nodes", "edges", "start_node"),
        nodes_ok,
        edges_ok,
        start_ok,
    )
