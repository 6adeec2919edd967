from algoviz.algorithms.sorting.bubble import BubbleSort
from algoviz.algorithms.sorting.quick  import QuickSort
from algoviz.algorithms.sorting.merge  import MergeSort
from algoviz.algorithms.sorting.heap   import HeapSort

__all__ = ["BubbleSort", "QuickSort", "MergeSort", "HeapSort"]
