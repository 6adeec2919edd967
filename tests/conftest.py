"""Shared fixtures for the algoviz test-suite."""

import pytest

from algoviz.engine import RunRecorder
from algoviz.graph import Graph
from algoviz.grid import PathfindingGrid
from algoviz.main import create_app


@pytest.fixture
def recorder():
    """A fresh on_step callback that keeps every Step."""
    return RunRecorder()


@pytest.fixture
def open_grid():
    """5x5 grid, no walls, start top-left, end bottom-right."""
    grid = PathfindingGrid(5, 5)
    grid.set_start(0, 0)
    grid.set_end(4, 4)
    return grid


@pytest.fixture
def sample_graph():
    return Graph.sample(directed=False)


@pytest.fixture
def dag():
    """
    Directed acyclic graph:

        shirt → tie → jacket
        pants → shoes
        pants → belt → jacket
        socks → shoes
    """
    g = Graph(directed=True, name="Dressing")
    for node_id in ["shirt", "tie", "jacket", "pants", "shoes", "belt", "socks"]:
        g.add_node(node_id)
    for src, tgt in [("shirt", "tie"), ("tie", "jacket"), ("pants", "shoes"),
                     ("pants", "belt"), ("belt", "jacket"), ("socks", "shoes")]:
        g.add_edge(src, tgt)
    return g


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "DEFAULT_SPEED": "instant", "STEP_HISTORY": None})
    yield app
    workspace = app.extensions["algoviz"]
    workspace.controller.cancel()
    workspace.controller.wait(5)


@pytest.fixture
def client(app):
    return app.test_client()
