"""
heap.py — Heap Sort
===================
Phase 1: build a max-heap in place by sifting down from the last
internal node (n // 2 - 1) to the root.
Phase 2: swap the root with the last unsorted element, shrink the heap
by one and sift the new root down.

Sift-down is iterative, so no extra stack grows with the heap height.
"""

from typing import Generator, List

from algoviz.algorithms.base import SortingAlgorithm
from algoviz.elements import Element, ElementRole, reset_roles
from algoviz.engine.step import Step, StepBuilder


class HeapSort(SortingAlgorithm):
    key              = "heap"
    name             = "Heap Sort"
    time_complexity  = "O(n log n)"
    space_complexity = "O(1)"
    description      = ("Heap Sort builds a max heap from the array, then repeatedly moves "
                        "the largest element to the end and restores the heap.")

    def steps(self, elements: List[Element], sb: StepBuilder) -> Generator[Step, None, None]:
        n = len(elements)

        yield sb.build("Building max heap...")
        for root in range(n // 2 - 1, -1, -1):
            yield from self._sift_down(elements, n, root, sb)

        for e in elements:
            e.role = ElementRole.PIVOT
        yield sb.build("Max heap built successfully")

        for end in range(n - 1, 0, -1):
            elements[0].role = ElementRole.SWAPPED
            elements[end].role = ElementRole.SWAPPED
            yield sb.build(f"Moving max element {elements[0].value} to position {end}", focus=end)

            elements[0], elements[end] = elements[end], elements[0]
            elements[end].role = ElementRole.SORTED
            yield sb.build(f"Element {elements[end].value} is now in its final position", focus=end)

            yield from self._sift_down(elements, end, 0, sb)

        reset_roles(elements, ElementRole.SORTED)
        yield sb.build("Heap Sort completed!", is_final=True)

    def _sift_down(self, a: List[Element], heap_size: int, root: int, sb: StepBuilder):
        while True:
            largest = root
            left, right = 2 * root + 1, 2 * root + 2

            a[root].role = ElementRole.COMPARED
            yield sb.build(f"Heapifying subtree rooted at index {root}", focus=root)

            if left < heap_size:
                a[left].role = ElementRole.COMPARED
                yield sb.build(f"Comparing with left child at index {left}", focus=left)
                if a[left].value > a[largest].value:
                    largest = left

            if right < heap_size:
                a[right].role = ElementRole.COMPARED
                yield sb.build(f"Comparing with right child at index {right}", focus=right)
                if a[right].value > a[largest].value:
                    largest = right

            for i in (root, left, right):
                if i < heap_size:
                    a[i].role = ElementRole.NORMAL

            if largest == root:
                return

            a[root], a[largest] = a[largest], a[root]
            a[root].role = a[largest].role = ElementRole.SWAPPED
            yield sb.build(f"Swapping {a[largest].value} with {a[root].value}", focus=largest)
            a[root].role = a[largest].role = ElementRole.NORMAL
            root = largest
