"""
dfs.py — Depth-First Search
=============================
Recursive DFS over an undirected graph built from an edge list.  The
recursion is a nested generator driven with `yield from`; the chain of
currently-open calls is mirrored in `stack` so the UI can render the
"recursion stack" panel at every step.

Yields a Step at:
  1. Entering a node                 →  "visit"
  2. Examining each neighbour        →  "check-neighbor"
  3. Descending into a new neighbour →  "recurse"
  4. Skipping a seen neighbour       →  "already-visited"
  5. Leaving a node                  →  "backtrack"
  6. All calls returned              →  "complete"
"""

from typing import Any, Dict, Generator, List

from graph import Graph
from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import validate_graph_input
from algorithms.bfs import DEFAULT_EDGES, DEFAULT_NODES


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, start):",                   # 0
    "    visited ← {}",                          # 1
    "    explore(start)",                        # 2
    "",                                          # 3
    "def explore(node):",                        # 4
    "    visited.add(node)",                     # 5
    "    for neighbour in adj(node):",           # 6
    "        if neighbour in visited:",          # 7
    "            continue",                      # 8
    "        explore(neighbour)",                # 9
    "    return  // backtrack",                  # 10
]


def initial_input() -> Dict[str, Any]:
    return {"nodes": list(DEFAULT_NODES), "edges": [list(e) for e in DEFAULT_EDGES], "start_node": 0}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb    = StepBuilder()
    graph = Graph.from_edge_list(data.get("nodes") or [], data.get("edges") or [])
    start = data.get("start_node")
    nodes = list(graph.nodes)
    edges = graph.edge_list()

    visited: List[Any] = []
    stack:   List[Any] = []

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Starting DFS from node {start}",
        nodes=nodes, edges=edges, graph=graph.adjacency(), start_node=start,
    )

    def explore(node: Any) -> Generator[Step, None, None]:
        visited.append(node)
        stack.append(node)
        yield sb.snapshot(
            "visit", code_line=5,
            description=f"Visit node {node}",
            node=node, stack=stack, visited=visited, nodes=nodes, edges=edges,
        )

        for nbr in graph.neighbours(node):
            yield sb.snapshot(
                "check-neighbor", code_line=6,
                description=f"Check neighbor {nbr} of node {node}",
                node=node, neighbor=nbr, stack=stack, visited=visited, nodes=nodes, edges=edges,
            )
            if nbr in visited:
                yield sb.snapshot(
                    "already-visited", code_line=8,
                    description=f"Neighbor {nbr} already visited, skip",
                    node=node, neighbor=nbr, stack=stack, visited=visited, nodes=nodes, edges=edges,
                )
                continue

            yield sb.snapshot(
                "recurse", code_line=9,
                description=f"Recurse into neighbor {nbr}",
                from_node=node, to_node=nbr, stack=stack, visited=visited, nodes=nodes, edges=edges,
            )
            yield from explore(nbr)

        stack.pop()
        yield sb.snapshot(
            "backtrack", code_line=10,
            description=f"Backtrack from node {node}",
            node=node, stack=stack, visited=visited, nodes=nodes, edges=edges,
        )

    if graph.has_node(start):
        yield from explore(start)

    yield sb.snapshot(
        "complete", code_line=2,
        description=f"DFS complete! Visited nodes: {', '.join(str(v) for v in visited) or 'none'}",
        visited=visited, nodes=nodes, edges=edges,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return validate_graph_input(data)
