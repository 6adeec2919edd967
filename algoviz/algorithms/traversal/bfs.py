"""
bfs.py — Breadth-First Search (graph)
=====================================
Level-indexed FIFO from the start node.  Neighbours are expanded in
sorted-id order; level(start) = 0 and every node is one level below the
node that discovered it, so `level` equals the hop distance.

`shortest_path(graph, start, target, on_step)` runs the same search with
an early exit and walks the parent ids back from the target.
"""

import logging
from collections import deque
from typing import Any, Deque, Generator, List, Optional

from algoviz.algorithms.base import TraversalAlgorithm, single_step
from algoviz.engine.control import RunControl, drive
from algoviz.engine.step import Step, StepBuilder, StepCallback
from algoviz.graph import Graph, Node

logger = logging.getLogger(__name__)


class GraphBFS(TraversalAlgorithm):
    key              = "bfs"
    name             = "Breadth-First Search"
    time_complexity  = "O(V + E)"
    space_complexity = "O(V)"
    description      = ("BFS explores nodes level by level using a queue. It finds the "
                        "shortest path (fewest edges) in unweighted graphs.")

    def steps(self, graph: Graph, start: Optional[Node], sb: StepBuilder) -> Generator[Step, None, List[Node]]:
        order: List[Node] = [start]
        queue: Deque[Node] = deque([start])
        self._discover(start, None, 0)

        yield sb.build(f"Starting BFS from node {start.id} (level 0)", focus=start, visited=order)

        while queue:
            current = queue.popleft()
            current.mark_exploring()
            yield sb.build(f"Processing node {current.id} (level {current.level})", focus=current, visited=order)

            for nbr in graph.sorted_neighbors(current):
                edge = graph.get_edge(current.id, nbr.id)
                if not nbr.visited:
                    self._discover(nbr, current.id, current.level + 1)
                    order.append(nbr)
                    queue.append(nbr)
                    if edge is not None:
                        edge.traversed = True
                    yield sb.build(f"Discovered node {nbr.id} at level {nbr.level}", focus=nbr, visited=order)
                elif nbr.id != current.parent:
                    if edge is not None:
                        edge.highlighted = True
                    yield sb.build(f"Cross edge from {current.id} to {nbr.id}", focus=nbr, visited=order)

            current.mark_finished()
            yield sb.build(f"Finished processing node {current.id}", focus=current, visited=order)

        yield sb.build(f"BFS traversal complete! Visited {len(order)} nodes.", visited=order, is_final=True)
        return order

    @staticmethod
    def _discover(node: Node, parent: Optional[str], level: int) -> None:
        node.visited = True
        node.parent = parent
        node.level = level
        node.discovery_time = level

    # ------------------------------------------------------------------
    # Shortest path (hop count)
    # ------------------------------------------------------------------
    def shortest_path(
        self,
        graph: Graph,
        start: Any,
        target: Any,
        on_step: StepCallback,
        control: Optional[RunControl] = None,
    ) -> List[Node]:
        """
        Nodes from start to target inclusive along a fewest-edges route,
        or [] when either endpoint is missing, the target is unreachable,
        or the run was cancelled.
        """
        if graph is None:
            raise TypeError("graph must be a Graph, not None")
        sb = StepBuilder(graph)
        src = graph.get_node(start.id if isinstance(start, Node) else str(start)) if start is not None else None
        dst = graph.get_node(target.id if isinstance(target, Node) else str(target)) if target is not None else None

        if src is None or dst is None:
            drive(single_step(sb.build("Start or target node is null!", is_final=True)), on_step, control)
            return []

        graph.reset()
        outcome = drive(self._path_steps(graph, src, dst, sb), on_step, control)
        path = outcome.result if outcome.completed else []
        logger.debug("%s: shortest path %s -> %s has %d nodes", self.name, src.id, dst.id, len(path or []))
        return path or []

    def _path_steps(self, graph: Graph, src: Node, dst: Node, sb: StepBuilder):
        queue: Deque[Node] = deque([src])
        self._discover(src, None, 0)
        yield sb.build(f"Searching for shortest path from {src.id} to {dst.id}", focus=src)

        found = src is dst
        while queue and not found:
            current = queue.popleft()
            current.mark_exploring()
            yield sb.build(f"Exploring from node {current.id}", focus=current)

            for nbr in graph.sorted_neighbors(current):
                if nbr.visited:
                    continue
                self._discover(nbr, current.id, current.level + 1)
                queue.append(nbr)
                yield sb.build(f"Discovered {nbr.id} (distance {nbr.level})", focus=nbr)
                if nbr is dst:
                    found = True
                    yield sb.build(f"Target node {dst.id} found!", focus=dst)
                    break
            current.mark_finished()

        if not found:
            yield sb.build(f"No path exists from {src.id} to {dst.id}", is_final=True)
            return []

        path: List[Node] = []
        cur: Optional[Node] = dst
        while cur is not None:
            path.append(cur)
            cur = graph.get_node(cur.parent) if cur.parent is not None else None
        path.reverse()

        for prev, nxt in zip(path, path[1:]):
            edge = graph.get_edge(prev.id, nxt.id)
            if edge is not None:
                edge.traversed = True
        yield sb.build(f"Shortest path found! Length: {len(path) - 1} edges", visited=path, is_final=True)
        return path
