"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over an undirected graph built from an edge list.
Yields a Step at every meaningful event:
  1. Enqueue the start node          →  "enqueue"
  2. Dequeue a node                  →  "dequeue"
  3. Process it                      →  "visit"
  4. Examine each neighbour          →  "check-neighbor"
  5. Unseen neighbour joins queue    →  "enqueue"   (with `parent`)
  6. Seen neighbour is skipped       →  "already-visited"
  7. Queue empty                     →  "complete"  (visited set, visit order)

Code lines are 0-indexed and match the PSEUDOCODE constant exported
alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Any, Dict, Generator, List

from graph import Graph
from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import validate_graph_input


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = code_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                   # 0
    "    visited ← {start}",                     # 1
    "    queue ← [start]",                       # 2
    "    while queue is not empty:",             # 3
    "        node ← queue.dequeue()",            # 4
    "        visit(node)",                       # 5
    "        for neighbour in adj(node):",       # 6
    "            if neighbour in visited:",      # 7
    "                continue",                  # 8
    "            visited.add(neighbour)",        # 9
    "            queue.enqueue(neighbour)",      # 10
    "    return visited",                        # 11
]

DEFAULT_NODES = [0, 1, 2, 3, 4, 5]
DEFAULT_EDGES = [[0, 1], [0, 2], [1, 3], [1, 4], [2, 4], [3, 5], [4, 5]]


def initial_input() -> Dict[str, Any]:
    return {"nodes": list(DEFAULT_NODES), "edges": [list(e) for e in DEFAULT_EDGES], "start_node": 0}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(data: Dict[str, Any]) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for every event during BFS execution.

    Every payload carries `nodes`, `edges`, `queue` and `visited` so a
    renderer never needs memory of earlier steps.
    """
    sb    = StepBuilder()
    graph = Graph.from_edge_list(data.get("nodes") or [], data.get("edges") or [])
    start = data.get("start_node")
    nodes = list(graph.nodes)
    edges = graph.edge_list()

    yield sb.snapshot(
        "init", code_line=0,
        description=f"Starting BFS from node {start}",
        nodes=nodes, edges=edges, graph=graph.adjacency(), start_node=start,
    )

    visited: List[Any] = []
    order:   List[Any] = []

    if graph.has_node(start):
        queue = deque([start])
        visited.append(start)
        yield sb.snapshot(
            "enqueue", code_line=2,
            description=f"Add start node {start} to queue and mark visited",
            node=start, parent=None, queue=list(queue), visited=visited, nodes=nodes, edges=edges,
        )

        while queue:
            node = queue.popleft()
            yield sb.snapshot(
                "dequeue", code_line=4,
                description=f"Dequeue node {node} and process it",
                node=node, queue=list(queue), visited=visited, nodes=nodes, edges=edges,
            )

            order.append(node)
            yield sb.snapshot(
                "visit", code_line=5,
                description=f"Visit node {node}",
                node=node, order=order, queue=list(queue), visited=visited, nodes=nodes, edges=edges,
            )

            for nbr in graph.neighbours(node):
                yield sb.snapshot(
                    "check-neighbor", code_line=6,
                    description=f"Check neighbor {nbr} of node {node}",
                    node=node, neighbor=nbr, queue=list(queue), visited=visited,
                    nodes=nodes, edges=edges,
                )

                if nbr in visited:
                    yield sb.snapshot(
                        "already-visited", code_line=8,
                        description=f"Neighbor {nbr} already visited, skip",
                        node=node, neighbor=nbr, queue=list(queue), visited=visited,
                        nodes=nodes, edges=edges,
                    )
                    continue

                visited.append(nbr)
                queue.append(nbr)
                yield sb.snapshot(
                    "enqueue", code_line=10,
                    description=f"Add neighbor {nbr} to queue and mark visited",
                    node=nbr, parent=node, queue=list(queue), visited=visited,
                    nodes=nodes, edges=edges,
                )

    yield sb.snapshot(
        "complete", code_line=11,
        description=f"BFS complete! Visited nodes: {', '.join(str(v) for v in visited) or 'none'}",
        visited=visited, order=order, nodes=nodes, edges=edges,
    )


def validate(data: Dict[str, Any]) -> Validation:
    return validate_graph_input(data)
