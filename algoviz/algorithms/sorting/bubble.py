"""
bubble.py — Bubble Sort
=======================
Adjacent comparisons over shrinking passes.  After pass i the largest
i+1 values sit at the tail in their final positions; a pass without a
single swap means the array is sorted and the loop exits early.

Yields a Step at:
  1. Every adjacent comparison      →  both elements COMPARED
  2. Every swap                     →  both elements SWAPPED
  3. End of each pass               →  tail element SORTED
  4. Completion
"""

from typing import Generator, List

from algoviz.algorithms.base import SortingAlgorithm
from algoviz.elements import Element, ElementRole, reset_roles
from algoviz.engine.step import Step, StepBuilder


class BubbleSort(SortingAlgorithm):
    key              = "bubble"
    name             = "Bubble Sort"
    time_complexity  = "O(n²)"
    space_complexity = "O(1)"
    description      = ("Bubble Sort repeatedly steps through the list, compares adjacent "
                        "elements and swaps them if they are in the wrong order.")

    def steps(self, elements: List[Element], sb: StepBuilder) -> Generator[Step, None, None]:
        n = len(elements)

        for i in range(n - 1):
            swapped = False

            for j in range(n - 1 - i):
                left, right = elements[j], elements[j + 1]
                left.role = right.role = ElementRole.COMPARED
                yield sb.build(f"Comparing elements at positions {j} and {j + 1}", focus=j)

                if left.value > right.value:
                    elements[j], elements[j + 1] = right, left
                    left.role = right.role = ElementRole.SWAPPED
                    swapped = True
                    yield sb.build(f"Swapped elements at positions {j} and {j + 1}", focus=j)

                left.role = right.role = ElementRole.NORMAL

            last = n - 1 - i
            elements[last].role = ElementRole.SORTED
            yield sb.build(f"Element at position {last} is now in its final position", focus=last)

            if not swapped:
                break

        reset_roles(elements, ElementRole.SORTED)
        yield sb.build("Bubble Sort completed!", is_final=True)
