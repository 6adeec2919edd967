"""
topological.py — Topological Sort
=================================
Two strategies over the WHOLE graph (the start node is ignored).  Both
refuse undirected graphs and report a cycle instead of a partial order:
in either case the result is [] and the last Step says why.

Kahn (queue based)
    in-degree table → seed queue with every zero-in-degree node (node
    insertion order) → pop, append, decrement successors.  Fewer output
    nodes than graph nodes means a cycle kept some in-degrees above 0.

DFS based
    depth-first from every unvisited node (insertion order, neighbours by
    sorted id) on an explicit stack of (node, pending neighbours) frames,
    so long dependency chains never touch Python's call stack.  Nodes in
    `on_stack` have open frames: reaching one again is a back edge, i.e. a
    cycle.  Nodes are collected as their frame closes; reversing that
    list yields the order.

The position of a node in the order is stored in `discovery_time` for
Kahn; the DFS strategy keeps real discovery / finish times.
"""

import itertools
from collections import deque
from typing import Deque, Dict, Generator, Iterator, List, Optional, Set, Tuple

from algoviz.algorithms.base import TraversalAlgorithm
from algoviz.engine.step import Step, StepBuilder
from algoviz.graph import Graph, Node


class _TopologicalSort(TraversalAlgorithm):
    time_complexity  = "O(V + E)"
    space_complexity = "O(V)"
    needs_start      = False

    def steps(self, graph: Graph, start: Optional[Node], sb: StepBuilder) -> Generator[Step, None, List[Node]]:
        if not graph.directed:
            yield sb.build("Topological sort requires a directed graph!", is_final=True)
            return []
        order = yield from self.order(graph, sb)
        return order

    def order(self, graph: Graph, sb: StepBuilder):
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Kahn
# ---------------------------------------------------------------------------
class KahnTopologicalSort(_TopologicalSort):
    key         = "topological_kahn"
    name        = "Topological Sort (Kahn's Algorithm)"
    description = ("Kahn's algorithm repeatedly removes nodes with no incoming edges, "
                   "producing a linear ordering of a directed acyclic graph.")

    def order(self, graph: Graph, sb: StepBuilder):
        result: List[Node] = []
        yield sb.build("Starting topological sort using Kahn's algorithm", visited=result)

        in_degree: Dict[str, int] = graph.in_degrees()
        yield sb.build("Calculated in-degrees for all nodes", visited=result)

        queue: Deque[Node] = deque(n for n in graph.nodes.values() if in_degree[n.id] == 0)
        for node in queue:
            node.mark_exploring()
        yield sb.build(f"Found {len(queue)} nodes with in-degree 0", visited=result)

        while queue:
            current = queue.popleft()
            current.discovery_time = len(result)
            result.append(current)
            current.mark_finished()
            yield sb.build(f"Added {current.id} to topological order (position {current.discovery_time})",
                           focus=current, visited=result)

            for nbr in graph.neighbors(current):
                in_degree[nbr.id] -= 1
                edge = graph.get_edge(current.id, nbr.id)
                if edge is not None:
                    edge.traversed = True
                if in_degree[nbr.id] == 0:
                    queue.append(nbr)
                    nbr.mark_exploring()
                    yield sb.build(f"In-degree of {nbr.id} reduced to 0, added to queue",
                                   focus=nbr, visited=result)
                else:
                    yield sb.build(f"In-degree of {nbr.id} reduced to {in_degree[nbr.id]}",
                                   focus=nbr, visited=result)

        if len(result) != graph.node_count():
            yield sb.build("Cycle detected! Topological sort impossible. "
                           f"Only {len(result)} of {graph.node_count()} nodes could be ordered.",
                           visited=result, is_final=True)
            return []

        yield sb.build("Topological sort completed successfully!", visited=result, is_final=True)
        return result


# ---------------------------------------------------------------------------
# DFS based
# ---------------------------------------------------------------------------
class DFSTopologicalSort(_TopologicalSort):
    key         = "topological_dfs"
    name        = "Topological Sort (DFS-based)"
    description = ("Runs depth-first search from every unvisited node and outputs nodes "
                   "in reverse finish order; a back edge reveals a cycle.")

    def order(self, graph: Graph, sb: StepBuilder):
        finished: List[Node] = []
        on_stack: Set[str] = set()
        clock = itertools.count()
        yield sb.build("Starting DFS-based topological sort", visited=finished)

        for node in graph.nodes.values():
            if node.visited:
                continue
            acyclic = yield from self._visit(graph, node, on_stack, clock, finished, sb)
            if not acyclic:
                yield sb.build(f"Cycle detected starting from node {node.id}! Topological sort impossible.",
                               focus=node, visited=finished, is_final=True)
                return []

        result: List[Node] = []
        while finished:
            node = finished.pop()
            result.append(node)
            yield sb.build(f"Added {node.id} to topological order (position {len(result) - 1})",
                           focus=node, visited=result)

        yield sb.build("DFS-based topological sort completed!", visited=result, is_final=True)
        return result

    def _visit(self, graph: Graph, root: Node, on_stack: Set[str], clock: Iterator[int],
               finished: List[Node], sb: StepBuilder):
        """Depth-first from `root`; False as soon as a back edge shows up."""
        self._enter(root, on_stack, clock)
        yield sb.build(f"Visiting node {root.id}", focus=root, visited=finished)
        frames: List[Tuple[Node, Iterator[Node]]] = [(root, iter(graph.sorted_neighbors(root)))]

        while frames:
            node, pending = frames[-1]
            nbr = next(pending, None)

            if nbr is None:
                frames.pop()
                on_stack.discard(node.id)
                node.finish_time = next(clock)
                node.mark_finished()
                finished.append(node)
                yield sb.build(f"Finished processing node {node.id}", focus=node, visited=finished)
            elif nbr.id in on_stack:
                yield sb.build(f"Back edge detected: {node.id} -> {nbr.id} (cycle!)", focus=nbr, visited=finished)
                return False
            elif not nbr.visited:
                nbr.parent = node.id
                self._enter(nbr, on_stack, clock)
                yield sb.build(f"Visiting node {nbr.id}", focus=nbr, visited=finished)
                frames.append((nbr, iter(graph.sorted_neighbors(nbr))))
        return True

    @staticmethod
    def _enter(node: Node, on_stack: Set[str], clock: Iterator[int]) -> None:
        node.visited = True
        node.discovery_time = next(clock)
        node.mark_exploring()
        on_stack.add(node.id)
