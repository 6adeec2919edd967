"""
edge.py — Graph Edge
====================
Connects two nodes.  Carries a weight and its own traversal flags so a
renderer can colour-code edges exactly as the algorithm touches them.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Equality is the (source, target) pair.  An undirected graph still
    stores ONE record per edge; the Graph's adjacency index lists it
    under both endpoints so neighbour queries traverse it both ways.
  - Weight defaults to 1; the traversal algorithms never read it.
"""

from typing import Optional


class Edge:
    """
    Attributes:
        source      : ID of the tail node.
        target      : ID of the head node.
        directed    : If False, traversal works in both directions.
        weight      : Numeric cost (default 1).
        highlighted : Edge examined by the current step.
        traversed   : Edge used as a tree / order edge.
    """

    __slots__ = ("source", "target", "directed", "weight", "highlighted", "traversed")

    def __init__(self, source: str, target: str, directed: bool = False, weight: float = 1.0):
        self.source:      str   = source
        self.target:      str   = target
        self.directed:    bool  = directed
        self.weight:      float = weight
        self.highlighted: bool  = False
        self.traversed:   bool  = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe traversal flags between runs."""
        self.highlighted = False
        self.traversed = False

    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a → node_b (respects directedness)."""
        if self.source == node_a and self.target == node_b:
            return True
        return not self.directed and self.source == node_b and self.target == node_a

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other.  None if node_id isn't one."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    def is_incident_to(self, node_id: str) -> bool:
        return node_id == self.source or node_id == self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source":      self.source,
            "target":      self.target,
            "directed":    self.directed,
            "weight":      self.weight,
            "highlighted": self.highlighted,
            "traversed":   self.traversed,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and (self.source, self.target) == (other.source, other.target)

    def __hash__(self) -> int:
        return hash((self.source, self.target))
