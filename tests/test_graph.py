"""
Tests for the adjacency model and the graph runners (BFS, DFS, Bellman–Ford).
"""

import pytest

from algorithms import get_algorithm
from algorithms.step import kinds
from graph import Graph, circular_layout

NODES = [0, 1, 2, 3, 4, 5]
EDGES = [[0, 1], [0, 2], [1, 3], [1, 4], [2, 4], [3, 5], [4, 5]]


class TestGraph:

    def test_undirected_edges_go_both_ways(self) -> None:
        g = Graph.from_edge_list([0, 1, 2], [[0, 1], [1, 2]])
        assert g.neighbours(1) == [0, 2]
        assert g.edge_count() == 2

    def test_directed(self) -> None:
        g = Graph.from_edge_list([0, 1], [[0, 1]], directed=True)
        assert g.neighbours(0) == [1]
        assert g.neighbours(1) == []

    def test_unknown_endpoints_dropped(self) -> None:
        g = Graph.from_edge_list([0, 1], [[0, 1], [1, 9], [3], "bad"])
        assert g.edge_list() == [[0, 1]]

    def test_reachable_from(self) -> None:
        g = Graph.from_edge_list([0, 1, 2, 3], [[0, 1], [2, 3]])
        assert sorted(g.reachable_from(0)) == [0, 1]
        assert g.reachable_from(7) == []

    def test_circular_layout(self) -> None:
        positions = circular_layout(4, cx=0, cy=0, radius=10)
        assert [p["id"] for p in positions] == [0, 1, 2, 3]
        assert positions[0] == {"id": 0, "x": 10.0, "y": 0.0}


class TestBFS:

    def test_visits_reachable_set(self) -> None:
        steps = get_algorithm("bfs").generate_steps({"nodes": NODES, "edges": EDGES, "start_node": 0})
        final = steps[-1]
        assert final.kind == "complete"
        assert set(final.payload["visited"]) == set(NODES)
        assert final.payload["order"] == [0, 1, 2, 3, 4, 5]

    def test_disconnected_nodes_not_visited(self) -> None:
        steps = get_algorithm("bfs").generate_steps(
            {"nodes": [0, 1, 2, 3], "edges": [[0, 1], [2, 3]], "start_node": 2}
        )
        assert sorted(steps[-1].payload["visited"]) == [2, 3]

    def test_every_node_dequeued_once(self) -> None:
        steps = get_algorithm("bfs").generate_steps({"nodes": NODES, "edges": EDGES, "start_node": 0})
        dequeued = [s.payload["node"] for s in steps if s.kind == "dequeue"]
        assert sorted(dequeued) == NODES

    def test_string_node_ids(self) -> None:
        steps = get_algorithm("bfs").generate_steps(
            {"nodes": ["a", "b", "c"], "edges": [["a", "b"], ["b", "c"]], "start_node": "a"}
        )
        assert steps[-1].payload["order"] == ["a", "b", "c"]

    def test_unknown_start_still_well_formed(self) -> None:
        steps = get_algorithm("bfs").generate_steps({"nodes": NODES, "edges": EDGES, "start_node": 42})
        assert kinds(steps) == ["init", "complete"]


class TestDFS:

    def test_depth_first_order(self) -> None:
        steps = get_algorithm("dfs").generate_steps({"nodes": NODES, "edges": EDGES, "start_node": 0})
        visits = [s.payload["node"] for s in steps if s.kind == "visit"]
        assert visits == [0, 1, 3, 5, 4, 2]
        assert set(steps[-1].payload["visited"]) == set(NODES)

    def test_stack_empties_after_backtracking(self) -> None:
        steps = get_algorithm("dfs").generate_steps({"nodes": NODES, "edges": EDGES, "start_node": 0})
        backtracks = [s for s in steps if s.kind == "backtrack"]
        assert len(backtracks) == len(NODES)
        assert backtracks[-1].payload["stack"] == []


def _bf(vertices, edges, source=0):
    return get_algorithm("bellman_ford").generate_steps(
        {"vertices": vertices, "edges": edges, "source": source}
    )


class TestBellmanFord:

    def test_default_graph_distances(self) -> None:
        info = get_algorithm("bellman_ford")
        steps = info.generate_steps(info.get_initial_input())
        final = steps[-1]
        assert final.payload["has_negative_cycle"] is False
        assert final.payload["dist"] == [0, -1, 2, -2, 1]

    def test_negative_cycle_detected(self) -> None:
        steps = _bf(3, [
            {"u": 0, "v": 1, "weight": 1},
            {"u": 1, "v": 2, "weight": -2},
            {"u": 2, "v": 1, "weight": 1},
        ])
        assert "negative-cycle" in kinds(steps)
        assert steps[-1].kind == "complete"
        assert steps[-1].payload["has_negative_cycle"] is True

    def test_unreachable_is_none(self) -> None:
        steps = _bf(3, [{"u": 0, "v": 1, "weight": 4}])
        assert steps[-1].payload["dist"] == [0, 4, None]

    def test_early_exit_when_nothing_changes(self) -> None:
        steps = _bf(4, [{"u": 0, "v": 1, "weight": 1}])
        assert "early-exit" in kinds(steps)

    @pytest.mark.parametrize("data, message", [
        ({"vertices": 1, "edges": [{"u": 0, "v": 0, "weight": 1}], "source": 0}, "vertices"),
        ({"vertices": 3, "edges": [], "source": 0}, "edge"),
        ({"vertices": 3, "edges": [{"u": 0, "v": 5, "weight": 1}], "source": 0}, "vertex"),
        ({"vertices": 3, "edges": [{"u": 0, "v": 1, "weight": 1}], "source": 3}, "Source"),
    ])
    def test_validation(self, data, message: str) -> None:
        result = get_algorithm("bellman_ford").validate_input(data)
        assert not result
        assert message.lower() in result.error.lower()
