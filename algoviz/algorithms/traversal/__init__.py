from algoviz.algorithms.traversal.dfs         import RecursiveDFS, IterativeDFS
from algoviz.algorithms.traversal.bfs         import GraphBFS
from algoviz.algorithms.traversal.topological import KahnTopologicalSort, DFSTopologicalSort

__all__ = [
    "RecursiveDFS", "IterativeDFS",
    "GraphBFS",
    "KahnTopologicalSort", "DFSTopologicalSort",
]
