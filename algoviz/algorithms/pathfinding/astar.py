"""
astar.py — A* Search
====================
Best-first search on f = g + h with the Manhattan distance to the end
as h (admissible on a 4-connected unit-cost grid, so the path found is
a shortest one).

Open set  : heapq of (f, counter, cell).  The counter breaks f-ties in
            insertion order, so cells are never compared directly.
Closed set: cells already expanded.  A cell may sit in the heap more
            than once; stale entries are dropped on pop.

Yields a Step at:
  1. Start
  2. Every expanded cell                 →  EXPLORING, then VISITED
  3. Every relaxed neighbour             →  FRONTIER (g / h / f updated)
  4. End popped                          →  path reconstruction
  5. Heap empty                          →  "No path found!"
"""

import heapq
import itertools
from typing import Generator, List, Set, Tuple

from algoviz.algorithms.base import PathfindingAlgorithm
from algoviz.engine.step import Step, StepBuilder
from algoviz.grid import Cell, CellType, PathfindingGrid


class AStar(PathfindingAlgorithm):
    key              = "astar"
    name             = "A* Algorithm"
    time_complexity  = "O(b^d)"
    space_complexity = "O(b^d)"
    is_optimal       = True
    description      = ("A* uses a heuristic to guide the search towards the goal, making it "
                        "more efficient than Dijkstra's algorithm while still guaranteeing "
                        "the shortest path.")

    def steps(self, grid: PathfindingGrid, sb: StepBuilder) -> Generator[Step, None, List[Cell]]:
        start, end = grid.start, grid.end
        counter = itertools.count()

        start.g_cost = 0
        start.h_cost = start.manhattan_distance(end)
        open_heap: List[Tuple[float, int, Cell]] = [(start.f_cost, next(counter), start)]
        closed: Set[Cell] = set()

        yield sb.build(f"Starting A* search from {start} to {end}", focus=start)

        while open_heap:
            _, _, current = heapq.heappop(open_heap)
            if current in closed:
                continue
            closed.add(current)

            current.mark(CellType.EXPLORING)
            yield sb.build(
                f"Exploring cell {current} (f={current.f_cost:g}, g={current.g_cost:g}, h={current.h_cost:g})",
                focus=current,
            )

            if current is end:
                yield sb.build("Path found! Reconstructing path...", focus=current)
                path = yield from self.reconstruct(end, sb, "Path reconstruction complete! Length: {length}")
                return path

            for nbr in grid.neighbors(current):
                if not nbr.is_walkable or nbr in closed:
                    continue
                tentative_g = current.g_cost + 1
                if tentative_g < nbr.g_cost:
                    nbr.parent = current
                    nbr.g_cost = tentative_g
                    nbr.h_cost = nbr.manhattan_distance(end)
                    nbr.label = f"f={nbr.f_cost:g}"
                    heapq.heappush(open_heap, (nbr.f_cost, next(counter), nbr))
                    nbr.mark(CellType.FRONTIER)
                    yield sb.build(f"Added neighbor {nbr} to frontier", focus=nbr)

            current.mark(CellType.VISITED)

        yield sb.build("No path found!", is_final=True)
        return []
