"""
algorithms/__init__.py — Algorithm Registry
===========================================
Single source of truth for every algorithm the engines know about.

    from algoviz.algorithms import REGISTRY, get_algorithm

REGISTRY is keyed by family, then by algorithm key:
    {
        "sorting":     {"bubble": AlgoInfo(...), "quick": ..., ...},
        "pathfinding": {"astar": ..., "dijkstra": ..., "bfs": ...},
        "traversal":   {"dfs_recursive": ..., ..., "topological_dfs": ...},
    }

AlgoInfo pairs the algorithm class with a few search tags; the static
descriptors (name, complexities, description, optimality) live on the
class itself.  Adding an algorithm means writing the class and adding
one entry here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Type, Union

from algoviz.algorithms.base import (
    Algorithm,
    PathfindingAlgorithm,
    SortingAlgorithm,
    TraversalAlgorithm,
)
from algoviz.algorithms.sorting     import BubbleSort, QuickSort, MergeSort, HeapSort
from algoviz.algorithms.pathfinding import AStar, Dijkstra, GridBFS
from algoviz.algorithms.traversal   import (
    RecursiveDFS, IterativeDFS, GraphBFS, KahnTopologicalSort, DFSTopologicalSort,
)

FAMILIES = ("sorting", "pathfinding", "traversal")


# ---------------------------------------------------------------------------
# AlgoInfo — registry card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    cls:  Type[Algorithm]                            # instantiated per lookup
    tags: List[str] = field(default_factory=list)   # e.g. ["stable", "in-place"]

    @property
    def key(self) -> str:
        return self.cls.key

    @property
    def family(self) -> str:
        return self.cls.family

    def create(self) -> Algorithm:
        return self.cls()

    def describe(self) -> dict:
        info = self.cls().describe()
        info["tags"] = list(self.tags)
        return info


def _family(*cards: AlgoInfo) -> Dict[str, AlgoInfo]:
    return {card.key: card for card in cards}


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, Dict[str, AlgoInfo]] = {
    "sorting": _family(
        AlgoInfo(BubbleSort, tags=["comparison", "stable", "in-place"]),
        AlgoInfo(QuickSort,  tags=["comparison", "divide-and-conquer", "in-place"]),
        AlgoInfo(MergeSort,  tags=["comparison", "divide-and-conquer", "stable"]),
        AlgoInfo(HeapSort,   tags=["comparison", "in-place"]),
    ),
    "pathfinding": _family(
        AlgoInfo(AStar,    tags=["heuristic", "shortest-path"]),
        AlgoInfo(Dijkstra, tags=["shortest-path"]),
        AlgoInfo(GridBFS,  tags=["unweighted", "shortest-path"]),
    ),
    "traversal": _family(
        AlgoInfo(RecursiveDFS,        tags=["depth-first"]),
        AlgoInfo(IterativeDFS,        tags=["depth-first"]),
        AlgoInfo(GraphBFS,            tags=["breadth-first", "shortest-path"]),
        AlgoInfo(KahnTopologicalSort, tags=["topological", "directed-only"]),
        AlgoInfo(DFSTopologicalSort,  tags=["topological", "directed-only"]),
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_info(family: str, key: str) -> AlgoInfo:
    """
    Registry card for (family, key).

    Raises:
        ValueError: unknown family or key.
    """
    if family not in REGISTRY:
        raise ValueError(f"Unknown algorithm family: {family!r} (expected one of {', '.join(FAMILIES)})")
    cards = REGISTRY[family]
    if key not in cards:
        raise ValueError(f"Unknown {family} algorithm: {key!r} (expected one of {', '.join(cards)})")
    return cards[key]


def get_algorithm(family: str, key: str) -> Algorithm:
    """Fresh algorithm instance for (family, key); ValueError if unknown."""
    return get_info(family, key).create()


def list_algorithms(family: Optional[str] = None) -> List[AlgoInfo]:
    """All registered cards in insertion order, optionally for one family."""
    if family is None:
        return [card for cards in REGISTRY.values() for card in cards.values()]
    if family not in REGISTRY:
        raise ValueError(f"Unknown algorithm family: {family!r}")
    return list(REGISTRY[family].values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    return [card for card in list_algorithms() if tag in card.tags]


def describe(algorithm: Union[Algorithm, AlgoInfo]) -> dict:
    """Descriptor dict (key, name, complexities, description, flags, tags)."""
    if isinstance(algorithm, AlgoInfo):
        return algorithm.describe()
    return get_info(algorithm.family, algorithm.key).describe()


__all__ = [
    "Algorithm", "SortingAlgorithm", "PathfindingAlgorithm", "TraversalAlgorithm",
    "AlgoInfo",
    "REGISTRY",
    "FAMILIES",
    "get_info",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "describe",
]
