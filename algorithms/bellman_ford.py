"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path algorithm that handles NEGATIVE edge
weights and detects negative cycles.

Structure:
  • Up to |V|-1 rounds of checking every directed edge.
  • Early exit as soon as a round performs no relaxation.
  • One extra "detector" pass: any edge that can still be relaxed
    proves a reachable negative cycle.

Yields a Step for:
  1. Start of every round                    →  "iteration-start"
  2. Every edge examined                     →  "check-edge"  (with `can_relax`)
  3. Every successful relaxation             →  "relax"
  4. A round without updates                 →  "early-exit"
  5. Start of the detector pass              →  "detect-start"
  6. Negative cycle found                    →  "negative-cycle"
  7. Final step                              →  "complete"  (`dist`, `has_negative_cycle`)

Distances are floats internally; payloads report ∞ as None so every
snapshot stays JSON-safe.
"""

import math
from typing import Any, Dict, Generator, List, Optional

from graph import circular_layout
from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import (
    as_list,
    first_failure,
    is_int,
    is_number,
    require_int_in_range,
    require_keys,
)

MIN_VERTICES = 2
MAX_VERTICES = 8
INF = math.inf


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(V, edges, source):",        # 0
    "    dist ← [∞] * V; dist[source] ← 0",      # 1
    "    for i in 1 … V-1:",                     # 2
    "        updated ← False",                   # 3
    "        for (u, v, w) in edges:",           # 4
    "            if dist[u] + w < dist[v]:",     # 5
    "                dist[v] ← dist[u] + w",     # 6
    "                updated ← True",            # 7
    "        if not updated: break",             # 8
    "    // negative-cycle check:",              # 9
    "    for (u, v, w) in edges:",               # 10
    "        if dist[u] + w < dist[v]:",         # 11
    "            return NEGATIVE CYCLE",         # 12
    "    return dist",                           # 13
]


def initial_input() -> Dict[str, Any]:
    return {
        "vertices": 5,
        "edges": [
            {"u": 0, "v": 1, "weight": -1},
            {"u": 0, "v": 2, "weight": 4},
            {"u": 1, "v": 2, "weight": 3},
            {"u": 1, "v": 3, "weight": 2},
            {"u": 1, "v": 4, "weight": 2},
            {"u": 3, "v": 2, "weight": 5},
            {"u": 3, "v": 1, "weight": 1},
            {"u": 4, "v": 3, "weight": -3},
        ],
        "source": 0,
    }


def _public(dist: List[float]) -> List[Optional[float]]:
    return [None if d == INF else d for d in dist]


def _fmt(d: float) -> str:
    return "∞" if d == INF else str(d)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb       = StepBuilder()
    vertices = data.get("vertices")
    vertices = min(vertices, MAX_VERTICES) if is_int(vertices) and vertices > 0 else 0
    source   = data.get("source", 0)

    # keep only edges whose endpoints exist; the trace must not crash on bad input
    edges: List[Dict[str, Any]] = [
        {"u": e["u"], "v": e["v"], "weight": e["weight"]}
        for e in as_list(data.get("edges"))
        if isinstance(e, dict)
        and is_int(e.get("u")) and is_int(e.get("v")) and is_number(e.get("weight"))
        and 0 <= e["u"] < vertices and 0 <= e["v"] < vertices
    ]
    positions = circular_layout(vertices)

    dist: List[float] = [INF] * vertices
    predecessor: List[Optional[int]] = [None] * vertices
    if is_int(source) and 0 <= source < vertices:
        dist[source] = 0

    yield sb.snapshot(
        "init", code_line=1,
        description=f"Initialize distances. Source node {source} = 0, all others = ∞",
        dist=_public(dist), predecessor=predecessor, vertices=vertices, edges=edges,
        source=source, node_positions=positions,
    )

    for iteration in range(1, vertices):
        updated = False
        yield sb.snapshot(
            "iteration-start", code_line=2,
            description=f"Iteration {iteration} of {vertices - 1}: relax all edges",
            dist=_public(dist), iteration=iteration, vertices=vertices, edges=edges,
            node_positions=positions,
        )

        for index, edge in enumerate(edges):
            u, v, w = edge["u"], edge["v"], edge["weight"]
            can_relax = dist[u] != INF and dist[u] + w < dist[v]
            yield sb.snapshot(
                "check-edge", code_line=5,
                description=(
                    f"Check edge ({u}→{v}, w={w}): dist[{u}]={_fmt(dist[u])}, "
                    f"dist[{v}]={_fmt(dist[v])}"
                ),
                dist=_public(dist), u=u, v=v, weight=w, edge_index=index,
                can_relax=can_relax, iteration=iteration, vertices=vertices, edges=edges,
                node_positions=positions,
            )

            if can_relax:
                old = dist[v]
                dist[v] = dist[u] + w
                predecessor[v] = u
                updated = True
                yield sb.snapshot(
                    "relax", code_line=6,
                    description=f"Relax! dist[{v}] = {_fmt(old)} → {dist[v]}",
                    dist=_public(dist), predecessor=predecessor, u=u, v=v, weight=w,
                    old_dist=None if old == INF else old, new_dist=dist[v],
                    edge_index=index, iteration=iteration, vertices=vertices, edges=edges,
                    node_positions=positions,
                )

        if not updated:
            yield sb.snapshot(
                "early-exit", code_line=8,
                description=f"No updates in iteration {iteration}. Converged early!",
                dist=_public(dist), iteration=iteration, vertices=vertices, edges=edges,
                node_positions=positions,
            )
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    yield sb.snapshot(
        "detect-start", code_line=9,
        description="Negative-cycle detector: one more pass over all edges",
        dist=_public(dist), vertices=vertices, edges=edges, node_positions=positions,
    )

    has_negative_cycle = False
    for index, edge in enumerate(edges):
        u, v, w = edge["u"], edge["v"], edge["weight"]
        if dist[u] != INF and dist[u] + w < dist[v]:
            has_negative_cycle = True
            yield sb.snapshot(
                "negative-cycle", code_line=12,
                description=f"Negative cycle detected! Edge ({u}→{v}) can still be relaxed.",
                dist=_public(dist), u=u, v=v, weight=w, edge_index=index,
                vertices=vertices, edges=edges, node_positions=positions,
            )
            break

    if has_negative_cycle:
        summary = "Negative cycle detected! Shortest paths undefined."
    else:
        summary = (
            f"Shortest distances from node {source}: "
            f"[{', '.join(_fmt(d) for d in dist)}]"
        )
    yield sb.snapshot(
        "complete", code_line=12 if has_negative_cycle else 13,
        description=summary,
        dist=_public(dist), predecessor=predecessor, vertices=vertices, edges=edges,
        source=source, node_positions=positions, has_negative_cycle=has_negative_cycle,
    )


def validate(data: Dict[str, Any]) -> Validation:

    def edges_ok() -> Validation:
        edges = data["edges"]
        if not isinstance(edges, list) or len(edges) == 0:
            return Validation.fail("Graph must have at least one edge")
        for e in edges:
            if not isinstance(e, dict) or not {"u", "v", "weight"} <= set(e):
                return Validation.fail("Each edge needs u, v and weight")
            if not is_number(e["weight"]):
                return Validation.fail("Edge weights must be numbers")
            for end in (e["u"], e["v"]):
                if not is_int(end) or not (0 <= end < data["vertices"]):
                    return Validation.fail(f"Edge endpoint {end} is not a valid vertex")
        return Validation.ok()

    def source_ok() -> Validation:
        source = data["source"]
        if not is_int(source) or not (0 <= source < data["vertices"]):
            return Validation.fail("Source must be a valid vertex")
        return Validation.ok()

    return first_failure(
        lambda: require_keys(data, "vertices", "edges", "source"),
        lambda: require_int_in_range(data["vertices"], "Number of vertices", MIN_VERTICES, MAX_VERTICES),
        source_ok,
        edges_ok,
    )
