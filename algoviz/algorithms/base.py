"""
base.py — Algorithm Families
=============================
One small interface per engine.  Every concrete algorithm is a class
that fills in the static descriptors and implements a Step generator:

    class BubbleSort(SortingAlgorithm):
        key  = "bubble"
        name = "Bubble Sort"
        ...
        def steps(self, elements, sb):
            yield sb.build("Comparing ...")

The public entry points (`sort`, `find_path`, `traverse`) are defined
ONCE here.  They validate input, run the generator through
`engine.control.drive` (callback → checkpoint after every Step) and
translate a cancelled run into its best-effort result.
"""

import logging
from typing import Any, Generator, List, Optional

from algoviz.elements import Element, snapshot
from algoviz.engine.control import RunControl, drive
from algoviz.engine.step import Step, StepBuilder, StepCallback
from algoviz.graph import Graph, Node
from algoviz.grid import Cell, CellType, PathfindingGrid

logger = logging.getLogger(__name__)


class Algorithm:
    """Static descriptors shared by every family."""

    family:           str = ""
    key:              str = ""
    name:             str = ""
    time_complexity:  str = ""
    space_complexity: str = ""
    description:      str = ""

    def describe(self) -> dict:
        return {
            "family":           self.family,
            "key":              self.key,
            "name":             self.name,
            "time_complexity":  self.time_complexity,
            "space_complexity": self.space_complexity,
            "description":      self.description,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
class SortingAlgorithm(Algorithm):
    family = "sorting"

    def sort(
        self,
        elements: List[Element],
        on_step: StepCallback,
        control: Optional[RunControl] = None,
    ) -> List[Element]:
        """
        Sort `elements` in place into non-decreasing order.

        Every Step carries an independent snapshot of the whole array.
        Returns the same list; after a cancelled run it is only partially
        sorted and must be discarded.
        """
        if elements is None:
            raise TypeError("elements must be a list, not None")
        sb = StepBuilder(elements, snapshot=snapshot)
        logger.debug("%s: sorting %d elements", self.name, len(elements))

        if len(elements) < 2:
            # nothing to order: a single completed step, no mutation
            steps = single_step(sb.build(f"{self.name} completed!", is_final=True))
        else:
            steps = self.steps(elements, sb)
        drive(steps, on_step, control)
        return elements

    def steps(self, elements: List[Element], sb: StepBuilder) -> Generator[Step, None, None]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Pathfinding
# ---------------------------------------------------------------------------
class PathfindingAlgorithm(Algorithm):
    family     = "pathfinding"
    is_optimal = False

    def describe(self) -> dict:
        info = super().describe()
        info["is_optimal"] = self.is_optimal
        return info

    def find_path(
        self,
        grid: PathfindingGrid,
        on_step: StepCallback,
        control: Optional[RunControl] = None,
    ) -> List[Cell]:
        """
        Cells from start to end inclusive, or [] when start / end is unset,
        the end is unreachable, or the run was cancelled.
        """
        if grid is None:
            raise TypeError("grid must be a PathfindingGrid, not None")
        sb = StepBuilder(grid)

        if grid.start is None or grid.end is None:
            # missing precondition: diagnostic step, empty result
            drive(single_step(sb.build("Start or end position not set!", is_final=True)), on_step, control)
            return []

        grid.reset_for_search()
        outcome = drive(self.steps(grid, sb), on_step, control)
        path = outcome.result if outcome.completed else []
        logger.debug("%s: path of %d cells", self.name, len(path or []))
        return path or []

    def steps(self, grid: PathfindingGrid, sb: StepBuilder) -> Generator[Step, None, List[Cell]]:
        raise NotImplementedError

    # -- shared path reconstruction --
    def reconstruct(self, end: Cell, sb: StepBuilder, summary: str, label: str = "Path step"):
        """
        Follow parent back-pointers from `end` to the start, reverse, mark
        PATH and emit one step per path cell.  `summary` is formatted with
        `length` for the closing step.
        """
        path: List[Cell] = []
        cur: Optional[Cell] = end
        while cur is not None:
            path.append(cur)
            cur = cur.parent
        path.reverse()

        for i, cell in enumerate(path):
            cell.mark(CellType.PATH)
            yield sb.build(f"{label} {i + 1}: {cell}", focus=cell)

        yield sb.build(summary.format(length=len(path)), is_final=True)
        return path


# ---------------------------------------------------------------------------
# Graph traversal
# ---------------------------------------------------------------------------
class TraversalAlgorithm(Algorithm):
    family            = "traversal"
    produces_ordering = True
    needs_start       = True      # topological sorts cover the whole graph instead

    def describe(self) -> dict:
        info = super().describe()
        info["produces_ordering"] = self.produces_ordering
        return info

    def traverse(
        self,
        graph: Graph,
        start: Any,
        on_step: StepCallback,
        control: Optional[RunControl] = None,
    ) -> List[Node]:
        """
        Visit order (or topological order) as a list of Nodes.

        `start` is a Node or a node id.  A missing / unknown start (for
        algorithms that need one) gives [] plus a diagnostic step.  After a
        cancelled run the visited-so-far list is returned and must be
        discarded.
        """
        if graph is None:
            raise TypeError("graph must be a Graph, not None")
        sb = StepBuilder(graph)

        start_node: Optional[Node] = None
        if start is not None:
            start_node = graph.get_node(start.id if isinstance(start, Node) else str(start))

        if self.needs_start and start_node is None:
            drive(single_step(sb.build("No starting node specified!", is_final=True)), on_step, control)
            return []

        graph.reset()
        outcome = drive(self.steps(graph, start_node, sb), on_step, control)
        if outcome.completed:
            order = outcome.result or []
        else:
            order = list(outcome.last_step.visited) if outcome.last_step else []
        logger.debug("%s: %d nodes in order", self.name, len(order))
        return order

    def steps(self, graph: Graph, start: Optional[Node], sb: StepBuilder) -> Generator[Step, None, List[Node]]:
        raise NotImplementedError


def single_step(step: Step) -> Generator[Step, None, None]:
    yield step
