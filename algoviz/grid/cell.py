from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Cell Type Enum — one role per cell, maps 1-to-1 with the display palette
# ---------------------------------------------------------------------------
class CellType(Enum):
    EMPTY     = "empty"
    WALL      = "wall"        # user-placed obstacle
    START     = "start"
    END       = "end"
    PATH      = "path"        # on the final reconstructed path
    VISITED   = "visited"     # finalized during search
    EXPLORING = "exploring"   # being expanded right now
    FRONTIER  = "frontier"    # discovered, waiting in the queue / heap


INF = float("inf")


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Immutable identity (row, col), mutable search state.

    Attributes:
        row, col : Position in the grid; equality and hashing use only these.
        type     : Current CellType.
        g_cost   : Cost from the start (inf until reached).
        h_cost   : Heuristic estimate to the end.
        f_cost   : g_cost + h_cost, always derived.
        parent   : Back-pointer toward the start, for path reconstruction.
        label    : Optional annotation ("f=4.0", "L3", …).
    """

    __slots__ = ("_row", "_col", "type", "g_cost", "h_cost", "parent", "label")

    def __init__(self, row: int, col: int, cell_type: CellType = CellType.EMPTY):
        self._row = row
        self._col = col
        self.type: CellType        = cell_type
        self.g_cost: float         = INF
        self.h_cost: float         = 0.0
        self.parent: Optional["Cell"] = None
        self.label:  str           = ""

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def position(self):
        return (self._row, self._col)

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    @property
    def is_walkable(self) -> bool:
        return self.type is not CellType.WALL

    @property
    def is_endpoint(self) -> bool:
        return self.type in (CellType.START, CellType.END)

    def mark(self, cell_type: CellType) -> None:
        """Set a search-state type without overwriting start / end."""
        if not self.is_endpoint:
            self.type = cell_type

    def reset(self) -> None:
        """Clear search state; walls, start and end keep their type."""
        if self.type not in (CellType.WALL, CellType.START, CellType.END):
            self.type = CellType.EMPTY
        self.g_cost = INF
        self.h_cost = 0.0
        self.parent = None
        self.label = ""

    # ------------------------------------------------------------------
    # Distances
    # ------------------------------------------------------------------
    def manhattan_distance(self, other: "Cell") -> int:
        return abs(self._row - other._row) + abs(self._col - other._col)

    def euclidean_distance(self, other: "Cell") -> float:
        return ((self._row - other._row) ** 2 + (self._col - other._col) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell({self._row},{self._col})[{self.type.value}]"

    def __str__(self) -> str:
        return f"({self._row},{self._col})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Cell) and self._row == other._row and self._col == other._col

    def __hash__(self) -> int:
        return hash((self._row, self._col))
