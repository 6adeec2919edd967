from algoviz.algorithms.pathfinding.astar    import AStar
from algoviz.algorithms.pathfinding.dijkstra import Dijkstra
from algoviz.algorithms.pathfinding.bfs      import GridBFS

__all__ = ["AStar", "Dijkstra", "GridBFS"]
