"""
main.py — algoviz Flask App
===========================
A thin JSON controller over the three engines.

Routes:
  GET  /api/algorithms          – descriptors grouped by family
  POST /api/sorting/run         – start a sort        {algorithm, values | size+seed, speed}
  POST /api/pathfinding/run     – start a grid search {algorithm, rows, cols, start, end, walls, maze, speed}
  POST /api/traversal/run       – start a traversal   {algorithm, directed, nodes, edges | sample, start, speed}
  POST /api/run/pause           – pause the active run
  POST /api/run/resume          – resume it
  POST /api/run/cancel          – cancel it
  POST /api/run/speed           – change pacing        {speed: preset | seconds}
  GET  /api/state               – controller state, latest step, metrics, result, data model

State management:
  One Workspace per app, stored in `app.extensions["algoviz"]`.  It holds
  the data model of the current run, a RunController (worker thread) and
  a RunRecorder (the controller's on_step callback).  A run request while
  a run is active is answered with 409.  Swapping in new data and
  launching the run happen under one workspace lock.
"""

import logging
import threading
from dataclasses import asdict
from typing import Any, Callable, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from algoviz.algorithms import FAMILIES, describe, get_algorithm, list_algorithms
from algoviz.config import DEFAULTS
from algoviz.elements import make_elements, random_elements, values_of
from algoviz.engine import RunController, RunInProgressError, RunRecorder, RunState
from algoviz.graph import Graph
from algoviz.grid import PathfindingGrid

logger = logging.getLogger(__name__)


class NoActiveRunError(LookupError):
    """Pause / resume / cancel with nothing to act on."""


# ---------------------------------------------------------------------------
# Workspace — per-app state
# ---------------------------------------------------------------------------
class Workspace:
    """
    Attributes:
        family     : Family of the current / last run ("sorting", ...).
        data       : Element list, PathfindingGrid or Graph being worked on.
        recorder   : Steps of the current / last run.
        controller : Worker-thread driver.
        metrics    : RunMetrics frozen when the last run ended.
    """

    def __init__(self, history: Optional[int] = None, speed: Any = 0.0):
        self.family:   Optional[str] = None
        self.data:     Any           = None
        self.recorder  = RunRecorder(history=history)
        self.controller = RunController(on_step=self.recorder, speed=speed, on_finish=self._finished)
        self.metrics   = None
        self._lock     = threading.Lock()

    def launch(self, family: str, data: Any, speed: Any, start: Callable[..., None], *args) -> None:
        """Swap in `data` and call `start(*args)`, atomically w.r.t. other requests."""
        with self._lock:
            self.prepare(family, data, speed)
            start(*args)

    def prepare(self, family: str, data: Any, speed: Any) -> None:
        """Swap in the data for a new run.  409 if one is still active."""
        if self.controller.is_active:
            raise RunInProgressError(f"{self.controller.algorithm.name} is still {self.controller.state.value}")
        # the last run's metrics are written by its worker after it settles
        self.controller.wait()
        if speed is not None:
            self.controller.set_speed(speed)
        self.recorder.reset()
        self.metrics = None
        self.family = family
        self.data = data

    def _finished(self, controller: RunController) -> None:
        self.metrics = self.recorder.finish(
            controller.algorithm,
            controller.result,
            cancelled=controller.state is not RunState.FINISHED,
        )

    # ------------------------------------------------------------------
    # JSON views
    # ------------------------------------------------------------------
    def result_view(self) -> Any:
        ctrl = self.controller
        if ctrl.is_active or ctrl.result is None:
            return None
        if self.family == "sorting":
            return values_of(ctrl.result)
        if self.family == "pathfinding":
            return [list(cell.position) for cell in ctrl.result]
        return [node.id for node in ctrl.result]

    def data_view(self) -> Any:
        if self.data is None:
            return None
        if self.family == "sorting":
            last = self.recorder.last_step
            elements = last.data if last is not None else self.data
            return [e.to_dict() for e in elements]
        return self.data.to_dict()

    def state_view(self) -> dict:
        ctrl = self.controller
        last = self.recorder.last_step
        return {
            "state":       ctrl.state.value,
            "family":      self.family,
            "algorithm":   describe(ctrl.algorithm) if ctrl.algorithm is not None else None,
            "delay":       ctrl.delay,
            "step":        {
                "number":   last.step_number,
                "message":  last.message,
                "is_final": last.is_final,
            } if last is not None else None,
            "total_steps": self.recorder.total_steps,
            "elapsed_ms":  ctrl.elapsed_ms,
            "metrics":     asdict(self.metrics) if self.metrics is not None else None,
            "result":      self.result_view(),
            "error":       str(ctrl.error) if ctrl.error is not None else None,
            "data":        self.data_view(),
        }


def get_workspace() -> Workspace:
    return current_app.extensions["algoviz"]


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _position(value, what: str):
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{what} must be [row, col]")
    return int(value[0]), int(value[1])


# ---------------------------------------------------------------------------
# Data model builders
# ---------------------------------------------------------------------------
def build_elements(body: dict):
    max_size = current_app.config["MAX_ARRAY_SIZE"]
    if "values" in body:
        values = body["values"]
        if not isinstance(values, list):
            raise ValueError("values must be a list of integers")
        if len(values) > max_size:
            raise ValueError(f"At most {max_size} values are allowed")
        return make_elements(values)

    size = int(body.get("size", current_app.config["DEFAULT_ARRAY_SIZE"]))
    if not 0 <= size <= max_size:
        raise ValueError(f"size must be between 0 and {max_size}")
    return random_elements(size, seed=body.get("seed"))


def build_grid(body: dict) -> PathfindingGrid:
    rows = int(body.get("rows", current_app.config["DEFAULT_GRID_ROWS"]))
    cols = int(body.get("cols", current_app.config["DEFAULT_GRID_COLS"]))
    if rows * cols > current_app.config["MAX_GRID_CELLS"]:
        raise ValueError(f"Grid may hold at most {current_app.config['MAX_GRID_CELLS']} cells")
    grid = PathfindingGrid(rows, cols)

    maze = body.get("maze")
    if maze is not None:
        if not isinstance(maze, dict):
            maze = {}
        grid.generate_random_maze(
            wall_probability=float(maze.get("wall_probability", current_app.config["DEFAULT_WALL_PROB"])),
            seed=maze.get("seed"),
        )

    for wall in body.get("walls", []):
        grid.set_wall(*_position(wall, "wall"))

    start = _position(body.get("start"), "start")
    if start is not None and grid.set_start(*start) is None:
        raise ValueError(f"start {list(start)} is outside the grid")
    end = _position(body.get("end"), "end")
    if end is not None and grid.set_end(*end) is None:
        raise ValueError(f"end {list(end)} is outside the grid")
    return grid


def build_graph(body: dict) -> Graph:
    directed = bool(body.get("directed", False))
    if body.get("sample", False):
        return Graph.sample(directed=directed)
    return Graph.from_dict({
        "directed": directed,
        "name":     body.get("name", "Graph"),
        "nodes":    body.get("nodes", []),
        "edges":    body.get("edges", []),
    })


# ---------------------------------------------------------------------------
# API blueprint
# ---------------------------------------------------------------------------
api = Blueprint("api", __name__, url_prefix="/api")


@api.route("/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({
        family: [card.describe() for card in list_algorithms(family)]
        for family in FAMILIES
    })


@api.route("/sorting/run", methods=["POST"])
def api_sorting_run():
    body = _body()
    algorithm = get_algorithm("sorting", body.get("algorithm", "bubble"))
    elements = build_elements(body)

    ws = get_workspace()
    ws.launch("sorting", elements, body.get("speed"), ws.controller.run_sort, algorithm, elements)
    return jsonify(ws.state_view()), 202


@api.route("/pathfinding/run", methods=["POST"])
def api_pathfinding_run():
    body = _body()
    algorithm = get_algorithm("pathfinding", body.get("algorithm", "astar"))
    grid = build_grid(body)

    ws = get_workspace()
    ws.launch("pathfinding", grid, body.get("speed"), ws.controller.run_pathfinding, algorithm, grid)
    return jsonify(ws.state_view()), 202


@api.route("/traversal/run", methods=["POST"])
def api_traversal_run():
    body = _body()
    algorithm = get_algorithm("traversal", body.get("algorithm", "dfs_recursive"))
    graph = build_graph(body)

    ws = get_workspace()
    ws.launch("traversal", graph, body.get("speed"),
              ws.controller.run_traversal, algorithm, graph, body.get("start"))
    return jsonify(ws.state_view()), 202


@api.route("/run/pause", methods=["POST"])
def api_run_pause():
    ws = get_workspace()
    if not ws.controller.pause():
        raise NoActiveRunError("No running algorithm to pause")
    return jsonify(ws.state_view())


@api.route("/run/resume", methods=["POST"])
def api_run_resume():
    ws = get_workspace()
    if not ws.controller.resume():
        raise NoActiveRunError("No paused algorithm to resume")
    return jsonify(ws.state_view())


@api.route("/run/cancel", methods=["POST"])
def api_run_cancel():
    ws = get_workspace()
    if not ws.controller.cancel():
        raise NoActiveRunError("No active algorithm to cancel")
    return jsonify(ws.state_view())


@api.route("/run/speed", methods=["POST"])
def api_run_speed():
    body = _body()
    if "speed" not in body:
        raise ValueError("speed is required")
    ws = get_workspace()
    delay = ws.controller.set_speed(body["speed"])
    return jsonify({"delay": delay})


@api.route("/state", methods=["GET"])
def api_state():
    return jsonify(get_workspace().state_view())


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@api.errorhandler(ValueError)
@api.errorhandler(TypeError)
@api.errorhandler(KeyError)
def bad_request(exc):
    message = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    return jsonify({"error": message}), 400


@api.errorhandler(RunInProgressError)
def busy(exc):
    return jsonify({"error": str(exc)}), 409


@api.errorhandler(NoActiveRunError)
def no_run(exc):
    return jsonify({"error": str(exc)}), 404


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(test_config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("ALGOVIZ")
    if test_config is not None:
        app.config.update(test_config)

    app.extensions["algoviz"] = Workspace(
        history=app.config["STEP_HISTORY"],
        speed=app.config["DEFAULT_SPEED"],
    )
    app.register_blueprint(api)
    return app


def main() -> None:
    app = create_app()
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("algoviz listening on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"])


if __name__ == "__main__":
    main()
