"""Tests for the pathfinding engine."""

import pytest

from algoviz.algorithms import get_algorithm
from algoviz.algorithms.pathfinding import AStar, Dijkstra, GridBFS
from algoviz.grid import CellType, PathfindingGrid

ALL_SEARCHES = [AStar, Dijkstra, GridBFS]


@pytest.fixture(params=ALL_SEARCHES, ids=lambda cls: cls.key)
def search(request):
    return request.param()


def assert_valid_path(grid, path):
    assert path[0] is grid.start
    assert path[-1] is grid.end
    for a, b in zip(path, path[1:]):
        assert a.manhattan_distance(b) == 1
        assert b.is_walkable
    assert len(set(path)) == len(path)


class TestOpenGrid:
    def test_five_by_five_path_has_nine_cells(self, search, open_grid, recorder):
        path = search.find_path(open_grid, recorder)
        assert len(path) == 9
        assert_valid_path(open_grid, path)

    def test_all_algorithms_find_equal_lengths(self, open_grid, recorder):
        lengths = {len(cls().find_path(open_grid, recorder)) for cls in ALL_SEARCHES}
        assert lengths == {9}

    def test_path_cells_are_marked(self, search, open_grid, recorder):
        path = search.find_path(open_grid, recorder)
        for cell in path[1:-1]:
            assert cell.type is CellType.PATH
        assert open_grid.start.type is CellType.START
        assert open_grid.end.type is CellType.END

    def test_adjacent_endpoints(self, search, recorder):
        grid = PathfindingGrid(1, 2)
        grid.set_start(0, 0)
        grid.set_end(0, 1)
        path = search.find_path(grid, recorder)
        assert [c.position for c in path] == [(0, 0), (0, 1)]


class TestObstacles:
    def test_detour_around_wall(self, search, recorder):
        grid = PathfindingGrid(5, 5)
        grid.set_start(2, 0)
        grid.set_end(2, 4)
        for r in range(4):
            grid.set_wall(r, 2)
        path = search.find_path(grid, recorder)
        assert_valid_path(grid, path)
        assert (4, 2) in [c.position for c in path]
        assert len(path) == 9

    def test_full_wall_row_gives_empty_path(self, search, recorder):
        grid = PathfindingGrid(5, 5)
        grid.set_start(0, 0)
        grid.set_end(4, 4)
        for c in range(5):
            grid.set_wall(2, c)
        assert search.find_path(grid, recorder) == []
        assert recorder.last_step.is_final
        assert "No path found" in recorder.last_step.message


class TestPreconditions:
    def test_missing_end(self, search, recorder):
        grid = PathfindingGrid(3, 3)
        grid.set_start(0, 0)
        assert search.find_path(grid, recorder) == []
        assert recorder.messages() == ["Start or end position not set!"]

    def test_none_grid(self, search, recorder):
        with pytest.raises(TypeError):
            search.find_path(None, recorder)


class TestSteps:
    def test_steps_carry_the_live_grid(self, search, open_grid, recorder):
        search.find_path(open_grid, recorder)
        assert all(step.data is open_grid for step in recorder.steps)
        assert recorder.steps[-1].is_final

    def test_every_dequeued_cell_is_reported(self, search, open_grid, recorder):
        search.find_path(open_grid, recorder)
        focused = {s.focus for s in recorder.steps if s.focus is not None}
        visited = {c for c in open_grid.all_cells() if c.type in (CellType.VISITED, CellType.PATH)}
        assert visited <= focused

    def test_consecutive_runs_are_independent(self, search, open_grid, recorder):
        first = [c.position for c in search.find_path(open_grid, recorder)]
        second = [c.position for c in search.find_path(open_grid, recorder)]
        assert first == second

    def test_reset_after_wall_edit(self, search, open_grid, recorder):
        search.find_path(open_grid, recorder)
        for c in range(5):
            open_grid.set_wall(2, c)
        assert search.find_path(open_grid, recorder) == []


class TestRegistry:
    @pytest.mark.parametrize("key, cls", [(c.key, c) for c in ALL_SEARCHES])
    def test_lookup(self, key, cls):
        algo = get_algorithm("pathfinding", key)
        assert isinstance(algo, cls)
        assert algo.is_optimal

    def test_descriptors(self):
        assert AStar.name == "A* Algorithm"
        assert AStar.time_complexity == "O(b^d)"
        assert Dijkstra.name == "Dijkstra's Algorithm"
        assert GridBFS.name == "Breadth-First Search"
