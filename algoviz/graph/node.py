from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED = "unvisited"   # default grey
    EXPLORING = "exploring"   # discovered / on the stack or queue
    FINISHED  = "finished"    # fully processed


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id), mutable label and traversal metadata.

    Attributes:
        id             : Unique identifier within a Graph.
        label          : Human-readable name (defaults to the id).
        state          : Current NodeState for visual encoding.
        visited        : True once a traversal has visited the node.
        discovery_time : DFS discovery timestamp / BFS level / topo position (-1 unset).
        finish_time    : DFS finish timestamp (-1 unset).
        level          : BFS distance in edges from the start (-1 unset).
        parent         : Node-id of the tree predecessor.  An id, not a
                         reference, so no ownership cycle is ever created.
    """

    __slots__ = ("id", "label", "state", "visited", "discovery_time",
                 "finish_time", "level", "parent")

    def __init__(self, node_id: str, label: Optional[str] = None):
        self.id:    str = node_id
        self.label: str = label or node_id
        self.reset()

    # ------------------------------------------------------------------
    # State helpers (used by the traversal algorithms)
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe traversal state back to defaults — called between runs."""
        self.state:          NodeState     = NodeState.UNVISITED
        self.visited:        bool          = False
        self.discovery_time: int           = -1
        self.finish_time:    int           = -1
        self.level:          int           = -1
        self.parent:         Optional[str] = None

    def mark_exploring(self) -> None:
        self.state = NodeState.EXPLORING

    def mark_finished(self) -> None:
        self.state = NodeState.FINISHED
        self.visited = True

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":             self.id,
            "label":          self.label,
            "state":          self.state.value,
            "visited":        self.visited,
            "discovery_time": self.discovery_time,
            "finish_time":    self.finish_time,
            "level":          self.level,
            "parent":         self.parent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=str(data["id"]), label=data.get("label"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
