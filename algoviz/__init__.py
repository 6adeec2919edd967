"""
algoviz
=======
Instrumented sorting, grid pathfinding and graph traversal algorithms that
report every intermediate state through a step callback, plus the
cooperative run / pause / resume / cancel machinery that drives them.

    from algoviz.algorithms import get_algorithm
    from algoviz.engine import RunController
"""

__version__ = "0.3.0"
