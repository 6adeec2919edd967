"""
graph/
-----
Graph data layer.  Public API:

    from algoviz.graph import Graph, Node, Edge, NodeState
"""

from algoviz.graph.node  import Node,  NodeState
from algoviz.graph.edge  import Edge
from algoviz.graph.graph import Graph

__all__ = [
    "Node",      "NodeState",
    "Edge",
    "Graph",
]
