"""
bfs.py — Breadth-First Search (grid)
====================================
FIFO processed one level at a time.  A cell's parent is fixed the
moment it is first discovered, which on an unweighted grid is already
along a shortest route.
"""

from collections import deque
from typing import Deque, Generator, List, Set

from algoviz.algorithms.base import PathfindingAlgorithm
from algoviz.engine.step import Step, StepBuilder
from algoviz.grid import Cell, CellType, PathfindingGrid


class GridBFS(PathfindingAlgorithm):
    key              = "bfs"
    name             = "Breadth-First Search"
    time_complexity  = "O(V + E)"
    space_complexity = "O(V)"
    is_optimal       = True
    description      = ("BFS explores the grid level by level, guaranteeing the shortest path "
                        "in unweighted graphs. It is optimal but may be slower than A* on "
                        "large grids.")

    def steps(self, grid: PathfindingGrid, sb: StepBuilder) -> Generator[Step, None, List[Cell]]:
        start, end = grid.start, grid.end

        queue: Deque[Cell] = deque([start])
        discovered: Set[Cell] = {start}
        start.g_cost = 0
        level = 0

        yield sb.build(f"Starting BFS from {start} to {end}", focus=start)

        while queue:
            level_size = len(queue)
            yield sb.build(f"Processing level {level} ({level_size} cells)")

            for _ in range(level_size):
                current = queue.popleft()
                current.mark(CellType.EXPLORING)
                yield sb.build(f"Exploring cell {current} at level {level}", focus=current)

                if current is end:
                    yield sb.build(f"Path found at level {level}! Reconstructing path...", focus=current)
                    path = yield from self.reconstruct(
                        end, sb, "BFS path complete! Length: {length} (shortest in unweighted graph)",
                    )
                    return path

                for nbr in grid.neighbors(current):
                    if not nbr.is_walkable or nbr in discovered:
                        continue
                    discovered.add(nbr)
                    nbr.parent = current
                    nbr.g_cost = current.g_cost + 1
                    nbr.label = f"L{level + 1}"
                    queue.append(nbr)
                    nbr.mark(CellType.FRONTIER)
                    yield sb.build(f"Added neighbor {nbr} to queue", focus=nbr)

                current.mark(CellType.VISITED)

            level += 1

        yield sb.build(f"No path found after exploring {level} levels!", is_final=True)
        return []
