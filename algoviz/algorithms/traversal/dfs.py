"""
dfs.py — Depth-First Search
===========================
Two variants with IDENTICAL visit order, discovery times, finish times
and parents.  Neighbours are always expanded in sorted-id order.

Recursive  : the textbook recursion, written as nested generators
             (`yield from`), so the call stack is Python's.  Graphs with
             more than `max_nodes` nodes are refused with a final Step
             and an empty result; the iterative variant has no limit.
Iterative  : an explicit stack of (node, parent_id, exiting) entries.

    pop (node, parent, False)  →  skip if already visited (stale entry),
                                  otherwise discover, push the EXIT marker,
                                  then push unvisited neighbours in
                                  REVERSE sorted order
    pop (node, _, True)        →  every descendant has finished: finish node

A single clock ticks on every discovery and every finish, so
discovery_time < finish_time and descendants nest inside ancestors.
"""

import itertools
from typing import Generator, Iterator, List, Optional, Tuple

from algoviz.algorithms.base import TraversalAlgorithm
from algoviz.engine.step import Step, StepBuilder
from algoviz.graph import Graph, Node


class _DepthFirstSearch(TraversalAlgorithm):
    time_complexity = "O(V + E)"
    description     = ("DFS explores as far as possible along each branch before "
                       "backtracking, recording discovery and finish times.")

    def steps(self, graph: Graph, start: Optional[Node], sb: StepBuilder) -> Generator[Step, None, List[Node]]:
        order: List[Node] = []
        yield sb.build(f"Starting DFS from node {start.id}", focus=start, visited=order)
        yield from self.search(graph, start, order, sb)
        yield sb.build(f"DFS traversal complete! Visited {len(order)} nodes.", visited=order, is_final=True)
        return order

    def search(self, graph: Graph, start: Node, order: List[Node], sb: StepBuilder):
        raise NotImplementedError

    @staticmethod
    def discover(graph: Graph, node: Node, parent: Optional[str], clock: Iterator[int], order: List[Node]) -> None:
        node.visited = True
        node.parent = parent
        node.discovery_time = next(clock)
        node.mark_exploring()
        order.append(node)
        if parent is not None:
            edge = graph.get_edge(parent, node.id)
            if edge is not None:
                edge.traversed = True

    @staticmethod
    def finish(node: Node, clock: Iterator[int]) -> None:
        node.finish_time = next(clock)
        node.mark_finished()


# ---------------------------------------------------------------------------
# Recursive
# ---------------------------------------------------------------------------
class RecursiveDFS(_DepthFirstSearch):
    key              = "dfs_recursive"
    name             = "Depth-First Search (Recursive)"
    space_complexity = "O(V) recursion stack"
    max_nodes        = 500     # recursion depth is bounded by the node count

    def steps(self, graph: Graph, start: Optional[Node], sb: StepBuilder) -> Generator[Step, None, List[Node]]:
        if graph.node_count() > self.max_nodes:
            yield sb.build(f"Graph has {graph.node_count()} nodes; recursive DFS supports at most "
                           f"{self.max_nodes}. Use iterative DFS instead.", is_final=True)
            return []
        order = yield from super().steps(graph, start, sb)
        return order

    def search(self, graph: Graph, start: Node, order: List[Node], sb: StepBuilder):
        yield from self._visit(graph, start, None, itertools.count(), order, sb)

    def _visit(self, graph, node, parent, clock, order, sb):
        self.discover(graph, node, parent, clock, order)
        yield sb.build(f"Discovered node {node.id} (discovery time: {node.discovery_time})",
                       focus=node, visited=order)

        for nbr in graph.sorted_neighbors(node):
            if nbr.visited:
                yield sb.build(f"Node {nbr.id} already visited (from {node.id})", focus=nbr, visited=order)
                continue
            yield sb.build(f"Exploring edge from {node.id} to {nbr.id}", focus=nbr, visited=order)
            yield from self._visit(graph, nbr, node.id, clock, order, sb)

        self.finish(node, clock)
        yield sb.build(f"Finished processing node {node.id} (finish time: {node.finish_time})",
                       focus=node, visited=order)


# ---------------------------------------------------------------------------
# Iterative
# ---------------------------------------------------------------------------
class IterativeDFS(_DepthFirstSearch):
    key              = "dfs_iterative"
    name             = "Depth-First Search (Iterative)"
    space_complexity = "O(V) explicit stack"

    def search(self, graph: Graph, start: Node, order: List[Node], sb: StepBuilder):
        clock = itertools.count()
        stack: List[Tuple[Node, Optional[str], bool]] = [(start, None, False)]

        while stack:
            node, parent, exiting = stack.pop()

            if exiting:
                self.finish(node, clock)
                yield sb.build(f"Finished processing node {node.id} (finish time: {node.finish_time})",
                               focus=node, visited=order)
                continue

            if node.visited:
                continue    # stale: reached through an earlier branch

            self.discover(graph, node, parent, clock, order)
            yield sb.build(f"Discovered node {node.id} (discovery time: {node.discovery_time})",
                           focus=node, visited=order)

            stack.append((node, None, True))
            for nbr in reversed(graph.sorted_neighbors(node)):
                if nbr.visited:
                    continue
                stack.append((nbr, node.id, False))
                edge = graph.get_edge(node.id, nbr.id)
                if edge is not None:
                    edge.highlighted = True
                yield sb.build(f"Pushed {nbr.id} onto the stack", focus=nbr, visited=order)
