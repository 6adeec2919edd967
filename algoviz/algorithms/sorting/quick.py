"""
quick.py — Quick Sort
=====================
Lomuto partition with the last element of the range as pivot, then
[low, p-1] and [p+1, high] are sorted in that order.

Pending ranges live on an explicit stack (right half pushed first), so
the left-to-right order of the textbook recursion is kept while
already-sorted input cannot exhaust Python's call stack.
"""

from typing import Generator, List, Tuple

from algoviz.algorithms.base import SortingAlgorithm
from algoviz.elements import Element, ElementRole, reset_roles
from algoviz.engine.step import Step, StepBuilder


class QuickSort(SortingAlgorithm):
    key              = "quick"
    name             = "Quick Sort"
    time_complexity  = "O(n log n) average, O(n²) worst case"
    space_complexity = "O(log n)"
    description      = ("Quick Sort picks a pivot element and partitions the array around it, "
                        "then recursively sorts the sub-arrays.")

    def steps(self, elements: List[Element], sb: StepBuilder) -> Generator[Step, None, None]:
        ranges: List[Tuple[int, int]] = [(0, len(elements) - 1)]
        while ranges:
            low, high = ranges.pop()
            if low < high:
                p = yield from self._partition(elements, low, high, sb)
                elements[p].role = ElementRole.SORTED
                yield sb.build(f"Pivot element {elements[p].value} placed at position {p}", focus=p)

                ranges.append((p + 1, high))
                ranges.append((low, p - 1))
            elif low == high:
                elements[low].role = ElementRole.SORTED

        reset_roles(elements, ElementRole.SORTED)
        yield sb.build("Quick Sort completed!", is_final=True)

    def _partition(self, a: List[Element], low: int, high: int, sb: StepBuilder):
        pivot = a[high]
        pivot.role = ElementRole.PIVOT
        yield sb.build(f"Choosing pivot: {pivot.value}", focus=high)

        i = low - 1
        for j in range(low, high):
            a[j].role = ElementRole.COMPARED
            yield sb.build(f"Comparing {a[j].value} with pivot {pivot.value}", focus=j)

            if a[j].value <= pivot.value:
                i += 1
                if i != j:
                    a[i], a[j] = a[j], a[i]
                    a[i].role = a[j].role = ElementRole.SWAPPED
                    yield sb.build(f"Swapped {a[i].value} and {a[j].value}", focus=i)
                a[i].role = ElementRole.NORMAL
            a[j].role = ElementRole.NORMAL

        a[i + 1], a[high] = a[high], a[i + 1]
        yield sb.build("Placing pivot in correct position", focus=i + 1)
        return i + 1
