"""
step.py — Algorithm Step Notification
======================================
Every algorithm is a generator that yields Step objects.  The public
`sort` / `find_path` / `traverse` methods hand each one to the caller's
`on_step` callback, then stop at the cooperative checkpoint.

A Step carries:

    • a running step number
    • a human-readable message ("Comparing 5 with pivot 9")
    • the data the step refers to:
        - sorting      → a SNAPSHOT (list of element copies), safe to keep
        - pathfinding  → the live PathfindingGrid reference
        - traversal    → the live Graph reference
    • the focus entity (cell / node being processed, or None)
    • the visited-so-far list (graph traversal only)
    • is_final on the very last step of a run

Design decisions:
  - Step is frozen.  The algorithm generator is the only writer of the
    data model; callbacks are readers.
  - Grid / graph steps carry a reference, not a copy.  Copying a whole
    grid per relaxed cell would dwarf the algorithm itself, and readers
    are allowed to observe the model between steps.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number : 0-based index of this step in the run.
        message     : Human-readable description of what just happened.
        data        : Element snapshot, grid or graph (see module docstring).
        focus       : Cell / Node currently processed, None for bookkeeping steps.
        visited     : Nodes visited so far (traversal), empty otherwise.
        is_final    : True on the last step of the run.
    """

    step_number: int            = 0
    message:     str            = ""
    data:        Any            = None
    focus:       Any            = None
    visited:     List[Any]      = field(default_factory=list)
    is_final:    bool           = False


StepCallback = Callable[[Step], None]


# ---------------------------------------------------------------------------
# Builder so algorithms don't have to count steps themselves
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Numbers steps and binds them to the data of one run.

    Usage inside an algorithm generator:
        sb = StepBuilder(grid)
        yield sb.build("Exploring cell (2,3)", focus=cell)
        yield sb.build("No path found!", is_final=True)

    `snapshot` (optional) is called on every build to produce the `data`
    field; sorting passes a copy-function so each Step owns its own list.
    """

    def __init__(self, data: Any = None, snapshot: Optional[Callable[[Any], Any]] = None):
        self.data        = data
        self.snapshot    = snapshot
        self.step_number = 0

    def build(
        self,
        message: str,
        focus: Any = None,
        visited: Optional[List[Any]] = None,
        is_final: bool = False,
    ) -> Step:
        data = self.snapshot(self.data) if self.snapshot else self.data
        step = Step(
            step_number=self.step_number,
            message=message,
            data=data,
            focus=focus,
            visited=list(visited) if visited else [],
            is_final=is_final,
        )
        self.step_number += 1
        return step
