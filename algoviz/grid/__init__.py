"""
grid/
-----
Pathfinding data layer.  Public API:

    from algoviz.grid import PathfindingGrid, Cell, CellType
"""

from algoviz.grid.cell import Cell, CellType
from algoviz.grid.grid import PathfindingGrid

__all__ = [
    "Cell",
    "CellType",
    "PathfindingGrid",
]
