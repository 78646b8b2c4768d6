"""
graph.py — Adjacency Model for the Graph Runners
=================================================
The graph runners (BFS, DFS, Bellman–Ford) receive plain edge lists in
their input dicts.  This module turns such a list into an adjacency
structure the runners can walk, and provides the circular layout the
renderers use to place nodes.

Responsibilities:
  1. Build adjacency from an edge list      (from_edge_list)
  2. Adjacency queries                      (neighbours, has_node, …)
  3. Snapshots for step payloads            (adjacency, edge_list)
  4. Node placement for renderers           (circular_layout)

Design decisions:
  - Neighbour order is insertion order of the edge list, so traversal
    order (and therefore the trace) is fully determined by the input.
  - Edges naming unknown nodes are dropped instead of raising: runners
    tolerate malformed input and still produce a well-formed trace.
  - `directed=False` adds both directions, which is how BFS/DFS
    inputs are meant to be read.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

NodeId = Any
WeightedEdge = Tuple[NodeId, NodeId, float]


def _is_id(value: Any) -> bool:
    return isinstance(value, (int, str))


class Graph:
    """
    Attributes:
        nodes    : ordered list of node ids
        directed : bool – graph-level directedness
        _adj     : {node_id: [(neighbour_id, weight), …]}
        _edges   : [(u, v, weight), …] as given (one entry per input edge)
    """

    def __init__(self, directed: bool = False):
        self.nodes:    List[NodeId] = []
        self.directed: bool         = directed
        self._adj:     Dict[NodeId, List[Tuple[NodeId, float]]] = {}
        self._edges:   List[WeightedEdge] = []

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_node(self, node_id: NodeId) -> None:
        if node_id not in self._adj:
            self.nodes.append(node_id)
            self._adj[node_id] = []

    def add_edge(self, u: NodeId, v: NodeId, weight: float = 1) -> bool:
        """Add u→v (and v→u when undirected).  Returns False if an endpoint is unknown."""
        if u not in self._adj or v not in self._adj:
            return False
        self._adj[u].append((v, weight))
        if not self.directed and u != v:
            self._adj[v].append((u, weight))
        self._edges.append((u, v, weight))
        return True

    @classmethod
    def from_edge_list(
        cls,
        nodes: Iterable[NodeId],
        edges: Iterable[Sequence[Any]],
        directed: bool = False,
    ) -> "Graph":
        """
        Build from `nodes` and `edges` where each edge is `(u, v)` or
        `(u, v, weight)`.  Malformed entries (and ids that are neither int
        nor str) are skipped.
        """
        g = cls(directed=directed)
        for n in nodes if isinstance(nodes, (list, tuple)) else []:
            if _is_id(n):
                g.add_node(n)
        for edge in edges if isinstance(edges, (list, tuple)) else []:
            if not isinstance(edge, (list, tuple)) or len(edge) < 2:
                continue
            if not (_is_id(edge[0]) and _is_id(edge[1])):
                continue
            weight = edge[2] if len(edge) > 2 else 1
            g.add_edge(edge[0], edge[1], weight)
        return g

    # ==================================================================
    # QUERIES
    # ==================================================================
    def has_node(self, node_id: NodeId) -> bool:
        return _is_id(node_id) and node_id in self._adj

    def neighbours(self, node_id: NodeId) -> List[NodeId]:
        return [v for v, _ in self._adj.get(node_id, [])]

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def reachable_from(self, source: NodeId) -> List[NodeId]:
        """Plain (untraced) reachability, used to check the traced runners."""
        if source not in self._adj:
            return []
        seen = [source]
        frontier = [source]
        while frontier:
            node = frontier.pop()
            for nbr in self.neighbours(node):
                if nbr not in seen:
                    seen.append(nbr)
                    frontier.append(nbr)
        return seen

    # ==================================================================
    # SNAPSHOTS
    # ==================================================================
    def adjacency(self) -> Dict[NodeId, List[NodeId]]:
        return {n: self.neighbours(n) for n in self.nodes}

    def edge_list(self) -> List[List[Any]]:
        return [[u, v] for u, v, _ in self._edges]

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
def circular_layout(
    count: int,
    cx: float = 150.0,
    cy: float = 150.0,
    radius: float = 100.0,
    ids: Optional[Sequence[NodeId]] = None,
) -> List[Dict[str, Any]]:
    """Evenly place `count` nodes on a circle.  Renderers read `x`, `y`."""
    ids = list(ids) if ids is not None else list(range(count))
    positions = []
    for i, node_id in enumerate(ids[:count]):
        angle = 2 * math.pi * i / count
        positions.append({
            "id": node_id,
            "x": round(cx + radius * math.cos(angle), 2),
            "y": round(cy + radius * math.sin(angle), 2),
        })
    return positions
