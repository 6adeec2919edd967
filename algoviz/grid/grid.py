"""
grid.py — Pathfinding Grid
==========================
Fixed-size rectangular collection of Cells.  The pathfinding engine and
any display layer both talk to this object.

Responsibilities:
  1. Exactly one Cell per in-range (row, col)
  2. Start / end designation (at most one of each)
  3. Wall editing                              (set / toggle)
  4. Neighbour queries                         (4- and 8-connected, clipped)
  5. Reset helpers                             (wipe search state, keep walls)
  6. Random maze generation and JSON view
"""

import random
from typing import Dict, List, Optional, Tuple

from algoviz.grid.cell import Cell, CellType

# up, down, left, right
DIRECTIONS_4: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIRECTIONS_8: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class PathfindingGrid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        start      : The start Cell, or None.
        end        : The end Cell, or None.
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: List[List[Cell]] = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
        self.start: Optional[Cell] = None
        self.end:   Optional[Cell] = None

    # ==================================================================
    # CELL ACCESS
    # ==================================================================
    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        if self.is_valid_position(row, col):
            return self._cells[row][col]
        return None

    def all_cells(self) -> List[Cell]:
        return [cell for row in self._cells for cell in row]

    # ==================================================================
    # START / END / WALLS
    # ==================================================================
    def set_start(self, row: int, col: int) -> Optional[Cell]:
        if not self.is_valid_position(row, col):
            return None
        if self.start is not None:
            self.start.type = CellType.EMPTY
        cell = self._cells[row][col]
        if cell == self.end:
            self.end = None
        cell.type = CellType.START
        self.start = cell
        return cell

    def set_end(self, row: int, col: int) -> Optional[Cell]:
        if not self.is_valid_position(row, col):
            return None
        if self.end is not None:
            self.end.type = CellType.EMPTY
        cell = self._cells[row][col]
        if cell == self.start:
            self.start = None
        cell.type = CellType.END
        self.end = cell
        return cell

    def set_wall(self, row: int, col: int, is_wall: bool = True) -> None:
        """Wall / unwall a cell.  Start and end are never walled."""
        cell = self.get_cell(row, col)
        if cell is None or cell.is_endpoint:
            return
        cell.type = CellType.WALL if is_wall else CellType.EMPTY

    def toggle_wall(self, row: int, col: int) -> None:
        cell = self.get_cell(row, col)
        if cell is None:
            return
        if cell.type is CellType.EMPTY:
            cell.type = CellType.WALL
        elif cell.type is CellType.WALL:
            cell.type = CellType.EMPTY

    def walls(self) -> List[Tuple[int, int]]:
        return [c.position for c in self.all_cells() if c.type is CellType.WALL]

    # ==================================================================
    # NEIGHBOUR QUERIES
    # ==================================================================
    def neighbors(self, cell: Cell) -> List[Cell]:
        """4-connected neighbours clipped to bounds (walls included)."""
        return self._offsets(cell, DIRECTIONS_4)

    def neighbors_with_diagonals(self, cell: Cell) -> List[Cell]:
        return self._offsets(cell, DIRECTIONS_8)

    def _offsets(self, cell: Cell, directions) -> List[Cell]:
        result = []
        for dr, dc in directions:
            r, c = cell.row + dr, cell.col + dc
            if self.is_valid_position(r, c):
                result.append(self._cells[r][c])
        return result

    # ==================================================================
    # RESET
    # ==================================================================
    def reset_for_search(self) -> None:
        """Wipe search state from every cell; walls, start and end stay."""
        for cell in self.all_cells():
            cell.reset()

    def clear(self) -> None:
        """Everything back to empty, start and end unset."""
        for cell in self.all_cells():
            cell.type = CellType.EMPTY
            cell.reset()
        self.start = None
        self.end = None

    # ==================================================================
    # GENERATION
    # ==================================================================
    def generate_random_maze(self, wall_probability: float = 0.3, seed: Optional[int] = None) -> None:
        """Random walls; start at (1,1) and end at (rows-2, cols-2) when they fit."""
        rng = random.Random(seed)
        self.clear()
        for cell in self.all_cells():
            if rng.random() < wall_probability:
                cell.type = CellType.WALL
        self.set_start(min(1, self.rows - 1), min(1, self.cols - 1))
        self.set_end(max(self.rows - 2, 0), max(self.cols - 2, 0))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "start": list(self.start.position) if self.start else None,
            "end":   list(self.end.position) if self.end else None,
            "cells": [[cell.type.value for cell in row] for row in self._cells],
        }

    def __repr__(self) -> str:
        return f"PathfindingGrid({self.rows}x{self.cols}, start={self.start}, end={self.end})"
