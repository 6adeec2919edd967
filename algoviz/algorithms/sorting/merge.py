"""
merge.py — Merge Sort
=====================
Top-down: split at left + (right - left) // 2, sort both halves, merge.
Ties are taken from the left run, so equal values keep their relative
order.  Only the two runs being merged are copied; the rest of the
array is never duplicated.
"""

from typing import Generator, List

from algoviz.algorithms.base import SortingAlgorithm
from algoviz.elements import Element, ElementRole, reset_roles
from algoviz.engine.step import Step, StepBuilder


class MergeSort(SortingAlgorithm):
    key              = "merge"
    name             = "Merge Sort"
    time_complexity  = "O(n log n)"
    space_complexity = "O(n)"
    description      = ("Merge Sort divides the array into halves, recursively sorts them, "
                        "and then merges the sorted halves.")

    def steps(self, elements: List[Element], sb: StepBuilder) -> Generator[Step, None, None]:
        yield from self._merge_sort(elements, 0, len(elements) - 1, sb)
        reset_roles(elements, ElementRole.SORTED)
        yield sb.build("Merge Sort completed!", is_final=True)

    def _merge_sort(self, a: List[Element], left: int, right: int, sb: StepBuilder):
        if left >= right:
            return
        middle = left + (right - left) // 2
        yield sb.build(f"Dividing range [{left}, {right}] at position {middle}", focus=middle)

        yield from self._merge_sort(a, left, middle, sb)
        yield from self._merge_sort(a, middle + 1, right, sb)
        yield from self._merge(a, left, middle, right, sb)

    def _merge(self, a: List[Element], left: int, middle: int, right: int, sb: StepBuilder):
        left_run  = a[left:middle + 1]
        right_run = a[middle + 1:right + 1]

        for e in left_run:
            e.role = ElementRole.COMPARED
        for e in right_run:
            e.role = ElementRole.PIVOT
        yield sb.build(f"Merging ranges [{left}, {middle}] and [{middle + 1}, {right}]", focus=left)

        i = j = 0
        k = left
        while i < len(left_run) and j < len(right_run):
            if left_run[i].value <= right_run[j].value:
                a[k] = left_run[i]
                i += 1
                side = "left"
            else:
                a[k] = right_run[j]
                j += 1
                side = "right"
            a[k].role = ElementRole.SWAPPED
            yield sb.build(f"Placing {a[k].value} from {side} array at position {k}", focus=k)
            k += 1

        # drain whichever run is left over
        for run, idx, side in ((left_run, i, "left"), (right_run, j, "right")):
            for e in run[idx:]:
                a[k] = e
                e.role = ElementRole.SWAPPED
                yield sb.build(f"Placing remaining {e.value} from {side} array at position {k}", focus=k)
                k += 1

        for e in a[left:right + 1]:
            e.role = ElementRole.NORMAL
        yield sb.build(f"Merged range [{left}, {right}]", focus=left)
