"""
graph.py — Graph Container
==========================
Single source of truth for the graph.  Traversal algorithms and any
display layer both talk to this object.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (neighbours, sorted neighbours, in-degrees)
  3. Sample graph factory                   (A..F demo graph)
  4. Serialisation round-trip               (to_dict / from_dict)
  5. Reset helpers                          (wipe traversal state, keep structure)

Design decisions:
  - Nodes stored in a dict keyed by id (insertion-ordered) for O(1) lookup.
  - Edges kept in a list; `_adj[node_id] → [Edge]` is maintained
    incrementally so neighbour queries are O(degree), not O(E).
  - `directed` is a graph-level flag stamped onto every edge added while
    it is set.  Undirected edges are indexed under both endpoints.
  - Every edge's endpoints exist in `nodes`: add_edge refuses unknown ids
    and remove_node drops incident edges first.
"""

from typing import Dict, List, Optional, Union

from algoviz.graph.node import Node
from algoviz.graph.edge import Edge

NodeRef = Union[str, Node]

SAMPLE_NODES = ["A", "B", "C", "D", "E", "F"]
SAMPLE_EDGES = [
    ("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"),
    ("C", "E"), ("D", "E"), ("D", "F"), ("E", "F"),
]


def _node_id(ref: NodeRef) -> str:
    return ref.id if isinstance(ref, Node) else ref


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}
        edges    : [Edge]
        directed : bool – applied to every edge added while set
        name     : display name
        _adj     : {node_id: [Edge, …]}
    """

    def __init__(self, directed: bool = False, name: str = "Graph"):
        self.nodes:    Dict[str, Node]       = {}
        self.edges:    List[Edge]            = []
        self.directed: bool                  = directed
        self.name:     str                   = name
        self._adj:     Dict[str, List[Edge]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node_id: str, label: Optional[str] = None) -> Node:
        """Add a node; an existing id returns the node already stored."""
        if node_id in self.nodes:
            return self.nodes[node_id]
        node = Node(node_id, label)
        self.nodes[node_id] = node
        self._adj[node_id] = []
        return node

    def remove_node(self, ref: NodeRef) -> bool:
        node_id = _node_id(ref)
        if node_id not in self.nodes:
            return False
        # remove every edge touching this node first
        for edge in [e for e in self.edges if e.is_incident_to(node_id)]:
            self._unlink(edge)
        del self.nodes[node_id]
        del self._adj[node_id]
        return True

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, ref: NodeRef) -> bool:
        return _node_id(ref) in self.nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, source: NodeRef, target: NodeRef, weight: float = 1.0) -> Edge:
        """
        Connect two existing nodes.  If an edge already connects them
        (direction-aware) that edge is returned instead of a duplicate.

        Raises:
            KeyError: when either endpoint is not in the graph.
        """
        src, tgt = _node_id(source), _node_id(target)
        for node_id in (src, tgt):
            if node_id not in self.nodes:
                raise KeyError(f"Unknown node: {node_id}")

        existing = self.get_edge(src, tgt)
        if existing is not None:
            return existing

        edge = Edge(src, tgt, directed=self.directed, weight=weight)
        self.edges.append(edge)
        self._adj[src].append(edge)
        if not edge.directed and src != tgt:
            self._adj[tgt].append(edge)
        return edge

    def remove_edge(self, source: NodeRef, target: NodeRef) -> bool:
        edge = self.get_edge(_node_id(source), _node_id(target))
        if edge is None:
            return False
        self._unlink(edge)
        return True

    def _unlink(self, edge: Edge) -> None:
        self.edges.remove(edge)
        self._adj[edge.source].remove(edge)
        if not edge.directed and edge.source != edge.target:
            self._adj[edge.target].remove(edge)

    def get_edge(self, source: NodeRef, target: NodeRef) -> Optional[Edge]:
        """The edge leading source → target (either way if undirected)."""
        src, tgt = _node_id(source), _node_id(target)
        for edge in self._adj.get(src, []):
            if edge.connects(src, tgt):
                return edge
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbors(self, ref: NodeRef) -> List[Node]:
        """Nodes reachable over one edge, in edge insertion order."""
        node_id = _node_id(ref)
        return [self.nodes[e.other_end(node_id)] for e in self._adj.get(node_id, [])]

    def sorted_neighbors(self, ref: NodeRef) -> List[Node]:
        """Neighbours ordered by id — the deterministic expansion order."""
        return sorted(self.neighbors(ref), key=lambda n: n.id)

    def incident_edges(self, ref: NodeRef) -> List[Edge]:
        return list(self._adj.get(_node_id(ref), []))

    def in_degrees(self) -> Dict[str, int]:
        """{node_id: number of incoming edges} following neighbour semantics."""
        degrees = {node_id: 0 for node_id in self.nodes}
        for node_id in self.nodes:
            for nbr in self.neighbors(node_id):
                degrees[nbr.id] += 1
        return degrees

    def degree(self, ref: NodeRef) -> int:
        return len(self._adj.get(_node_id(ref), []))

    # ==================================================================
    # RESET (keep structure, wipe traversal state)
    # ==================================================================
    def reset(self) -> None:
        for node in self.nodes.values():
            node.reset()
        for edge in self.edges:
            edge.reset()

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._adj.clear()

    # ==================================================================
    # SAMPLE GRAPH
    # ==================================================================
    @classmethod
    def sample(cls, directed: bool = False) -> "Graph":
        """
        Six nodes A..F.  In the directed variant F → A closes the cycle
        A → C → D → F → A, so topological sort must fail on it.
        """
        g = cls(directed=directed, name="Sample Graph")
        for node_id in SAMPLE_NODES:
            g.add_node(node_id)
        for src, tgt in SAMPLE_EDGES:
            g.add_edge(src, tgt)
        if directed:
            g.add_edge("F", "A")
        return g

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "name":     self.name,
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """
        Accepts the to_dict() shape, plus shorthand for hand-written input:
            nodes: ["A", "B"]                 or [{"id": "A", "label": …}]
            edges: [["A", "B"], ["B", "C", 2]] or [{"source": …, "target": …}]
        """
        g = cls(directed=bool(data.get("directed", False)), name=data.get("name", "Graph"))
        for nd in data.get("nodes", []):
            if isinstance(nd, dict):
                node = Node.from_dict(nd)
                g.add_node(node.id, node.label)
            else:
                g.add_node(str(nd))
        for ed in data.get("edges", []):
            if isinstance(ed, dict):
                g.add_edge(str(ed["source"]), str(ed["target"]), float(ed.get("weight", 1.0)))
            else:
                src, tgt, *rest = ed
                g.add_edge(str(src), str(tgt), float(rest[0]) if rest else 1.0)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def is_empty(self) -> bool:
        return not self.nodes

    def statistics(self) -> str:
        kind = "Directed" if self.directed else "Undirected"
        return f"Nodes: {self.node_count()}, Edges: {self.edge_count()}, Type: {kind}"

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
