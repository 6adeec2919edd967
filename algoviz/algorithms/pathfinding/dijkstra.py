"""
dijkstra.py — Dijkstra's Algorithm
==================================
Min-heap on g (every step costs 1).  A visited set keeps each cell from
being settled twice; the search stops as soon as the end is popped,
because a popped distance is final.
"""

import heapq
import itertools
from typing import Generator, List, Set, Tuple

from algoviz.algorithms.base import PathfindingAlgorithm
from algoviz.engine.step import Step, StepBuilder
from algoviz.grid import Cell, CellType, PathfindingGrid


class Dijkstra(PathfindingAlgorithm):
    key              = "dijkstra"
    name             = "Dijkstra's Algorithm"
    time_complexity  = "O(V log V + E)"
    space_complexity = "O(V)"
    is_optimal       = True
    description      = ("Dijkstra's algorithm finds the shortest path by always exploring the "
                        "nearest unexplored cell. Guarantees an optimal solution but may "
                        "explore more cells than A*.")

    def steps(self, grid: PathfindingGrid, sb: StepBuilder) -> Generator[Step, None, List[Cell]]:
        start, end = grid.start, grid.end
        counter = itertools.count()

        start.g_cost = 0
        heap: List[Tuple[float, int, Cell]] = [(0, next(counter), start)]
        visited: Set[Cell] = set()

        yield sb.build(f"Starting Dijkstra's algorithm from {start} to {end}", focus=start)

        while heap:
            dist, _, current = heapq.heappop(heap)
            if current in visited:
                continue
            visited.add(current)

            current.mark(CellType.EXPLORING)
            yield sb.build(f"Processing cell {current} (distance={dist:g})", focus=current)

            if current is end:
                yield sb.build("Shortest path found! Reconstructing path...", focus=current)
                path = yield from self.reconstruct(
                    end, sb, "Shortest path found! Length: {length}", label="Shortest path step",
                )
                return path

            for nbr in grid.neighbors(current):
                if not nbr.is_walkable or nbr in visited:
                    continue
                new_dist = current.g_cost + 1
                if new_dist < nbr.g_cost:
                    nbr.g_cost = new_dist
                    nbr.parent = current
                    nbr.label = f"d={new_dist:g}"
                    heapq.heappush(heap, (new_dist, next(counter), nbr))
                    nbr.mark(CellType.FRONTIER)
                    yield sb.build(f"Updated distance to {nbr} = {new_dist:g}", focus=nbr)

            current.mark(CellType.VISITED)

        yield sb.build("No path found!", is_final=True)
        return []
