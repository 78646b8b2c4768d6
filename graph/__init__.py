"""
graph/
------
Adjacency model shared by the graph runners.

    from graph import Graph, circular_layout
"""

from graph.graph import Graph, circular_layout

__all__ = ["Graph", "circular_layout"]
