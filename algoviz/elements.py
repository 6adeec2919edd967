"""
elements.py — Array Elements
============================
The data model the sorting engine works on: a plain Python list of
Element objects, sorted in place.

Each Element carries an integer value and a display role that the
sorting algorithms re-tag as they compare, swap and settle elements.
"""

import random
from enum import Enum
from typing import Iterable, List, Optional


class ElementRole(Enum):
    NORMAL   = "normal"
    COMPARED = "compared"    # being compared right now
    SWAPPED  = "swapped"     # just moved
    PIVOT    = "pivot"       # quicksort pivot / heap root / active range
    SORTED   = "sorted"      # in its final position


class Element:
    """An integer value plus the role it currently plays in the sort."""

    __slots__ = ("value", "role")

    def __init__(self, value: int, role: ElementRole = ElementRole.NORMAL):
        self.value: int         = int(value)
        self.role:  ElementRole = role

    def copy(self) -> "Element":
        return Element(self.value, self.role)

    def to_dict(self) -> dict:
        return {"value": self.value, "role": self.role.value}

    def __repr__(self) -> str:
        return f"Element({self.value}, {self.role.value})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def make_elements(values: Iterable[int]) -> List[Element]:
    return [Element(v) for v in values]


def random_elements(size: int, seed: Optional[int] = None) -> List[Element]:
    """`size` elements with values drawn uniformly from 1..size."""
    if size < 0:
        raise ValueError("size must be non-negative")
    rng = random.Random(seed)
    return [Element(rng.randint(1, max(size, 1))) for _ in range(size)]


def values_of(elements: Iterable[Element]) -> List[int]:
    return [e.value for e in elements]


def reset_roles(elements: Iterable[Element], role: ElementRole = ElementRole.NORMAL) -> None:
    for e in elements:
        e.role = role


def snapshot(elements: List[Element]) -> List[Element]:
    """Independent copy of the whole array, for Step.data."""
    return [e.copy() for e in elements]
