"""
controller.py — Threaded Execution Controller
==============================================
The RunController is the ONLY object an outside collaborator (UI, HTTP
layer, test) needs to drive an algorithm interactively.  It starts the
run on a dedicated worker thread, hands every Step to the caller's
callback on that same thread, and relays pause / resume / cancel.

State machine:
    IDLE      →  run_*()   →  RUNNING
    RUNNING   →  pause()   →  PAUSED
    PAUSED    →  resume()  →  RUNNING
    RUNNING   →  (algorithm returns)   → FINISHED
    RUNNING / PAUSED  →  cancel()      → CANCELLED  (once the worker exits)
    any active state  →  (exception)   → FAILED

One active run per data model:
  Starting a run while this controller's run is still active, or while
  ANY controller is running on the same list / grid / graph object,
  raises RunInProgressError.  cancel() + wait() frees the data again.

Thread safety:
  pause / resume / cancel / wait and the read-only properties may be
  called from any thread.  The callback runs on the worker; handing
  data to a display thread is the callback's job.
"""

import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from algoviz.config import DEFAULT_SPEED, SPEED_PRESETS
from algoviz.engine.control import RunControl
from algoviz.engine.step import Step, StepCallback

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    FINISHED  = "finished"
    CANCELLED = "cancelled"
    FAILED    = "failed"


ACTIVE_STATES = (RunState.RUNNING, RunState.PAUSED)


class RunInProgressError(RuntimeError):
    """A run is already active for this controller or data model."""


# data-model id → controller currently running on it
_claims: Dict[int, "RunController"] = {}
_claims_lock = threading.Lock()


def resolve_delay(speed: Any) -> float:
    """Map a speed preset name or a number of seconds to a delay."""
    if speed is None:
        return SPEED_PRESETS[DEFAULT_SPEED]
    if isinstance(speed, str):
        if speed not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {speed}")
        return SPEED_PRESETS[speed]
    return max(0.0, float(speed))


# ---------------------------------------------------------------------------
# RunController
# ---------------------------------------------------------------------------
class RunController:
    """
    Attributes:
        on_step   : Callback(Step) invoked on the worker after every step.
        on_finish : Optional callback(controller) invoked on the worker when
                    the run ends, whatever the outcome.  The next run
                    on this controller starts only after it returns.
        delay     : Pacing between steps, in seconds.
        state     : Current RunState.
        result    : Value returned by the algorithm (best-effort if cancelled).
        error     : Exception raised inside the worker, if any.
        last_step : Most recent Step seen.
    """

    def __init__(
        self,
        on_step: Optional[StepCallback] = None,
        speed: Any = 0.0,
        on_finish: Optional[Callable[["RunController"], None]] = None,
    ):
        self.on_step   = on_step
        self.on_finish = on_finish
        self.delay     = resolve_delay(speed)

        self.state:      RunState              = RunState.IDLE
        self.result:     Any                   = None
        self.error:      Optional[BaseException] = None
        self.last_step:  Optional[Step]        = None
        self.algorithm:  Any                   = None

        self._lock     = threading.Lock()
        self._control: Optional[RunControl]       = None
        self._thread:  Optional[threading.Thread] = None
        self._done     = threading.Event()
        self._done.set()
        self._data_id: Optional[int] = None
        self._started_at = 0.0
        self.elapsed_ms  = 0.0

    # ------------------------------------------------------------------
    # Starting runs
    # ------------------------------------------------------------------
    def run_sort(self, algorithm, elements) -> None:
        """Sort `elements` in place with `algorithm` on a worker thread."""
        self._launch(
            elements, algorithm,
            lambda control: algorithm.sort(elements, self._notify, control),
        )

    def run_pathfinding(self, algorithm, grid) -> None:
        self._launch(
            grid, algorithm,
            lambda control: algorithm.find_path(grid, self._notify, control),
        )

    def run_traversal(self, algorithm, graph, start=None) -> None:
        self._launch(
            graph, algorithm,
            lambda control: algorithm.traverse(graph, start, self._notify, control),
        )

    def _launch(self, data: Any, algorithm, work: Callable[[RunControl], Any]) -> None:
        if data is None:
            raise TypeError("Cannot start a run without input data")

        # a settled run may still be inside on_finish; let it read its own attributes
        previous = self._done
        if not self.is_active and threading.current_thread() is not self._thread:
            previous.wait()

        with self._lock:
            if self.state in ACTIVE_STATES:
                raise RunInProgressError(
                    f"{self.algorithm.name} is still {self.state.value}; cancel it and wait first"
                )
            with _claims_lock:
                owner = _claims.get(id(data))
                if owner is not None and owner is not self:
                    raise RunInProgressError("Another run is active on this data")
                _claims[id(data)] = self

            self._data_id   = id(data)
            self._control   = RunControl(delay=self.delay)
            self._done      = threading.Event()
            self.algorithm  = algorithm
            self.result     = None
            self.error      = None
            self.last_step  = None
            self.elapsed_ms = 0.0
            self.state      = RunState.RUNNING

            self._thread = threading.Thread(
                target=self._worker,
                args=(work, self._control, self._done),
                name=f"algoviz-{algorithm.key}",
                daemon=True,
            )

        logger.info("Starting %s", algorithm.name)
        self._started_at = time.monotonic()
        self._thread.start()

    # ------------------------------------------------------------------
    # Pause / Resume / Cancel
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        """Ask the run to block at its next checkpoint.  False if idle."""
        with self._lock:
            if self.state != RunState.RUNNING:
                return False
            self._control.pause()
            self.state = RunState.PAUSED
        logger.info("Paused %s", self.algorithm.name)
        return True

    def resume(self) -> bool:
        with self._lock:
            if self.state != RunState.PAUSED:
                return False
            self._control.resume()
            self.state = RunState.RUNNING
        logger.info("Resumed %s", self.algorithm.name)
        return True

    def toggle_pause(self) -> bool:
        if self.state == RunState.PAUSED:
            return self.resume()
        return self.pause()

    def cancel(self) -> bool:
        """Signal cancellation.  Call wait() to observe the worker exit."""
        with self._lock:
            if self.state not in ACTIVE_STATES:
                return False
            self._control.cancel()
        logger.info("Cancelling %s", self.algorithm.name)
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker has exited.  True if it did."""
        return self._done.wait(timeout)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: Any) -> float:
        """Preset name or seconds; applies to the active run immediately."""
        self.delay = resolve_delay(speed)
        if self._control is not None:
            self._control.delay = self.delay
        return self.delay

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def is_paused(self) -> bool:
        return self.state == RunState.PAUSED

    def outcome(self) -> Any:
        """Result of a finished run; re-raises the worker's exception."""
        if self.error is not None:
            raise self.error
        return self.result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self, step: Step) -> None:
        self.last_step = step
        if self.on_step is not None:
            self.on_step(step)

    def _worker(
        self,
        work: Callable[[RunControl], Any],
        control: RunControl,
        done: threading.Event,
    ) -> None:
        final = RunState.FAILED
        try:
            self.result = work(control)
            final = RunState.CANCELLED if control.is_cancelled else RunState.FINISHED
        except Exception as exc:
            logger.exception("%s failed", self.algorithm.name)
            self.error = exc
        finally:
            # also reached on SystemExit / KeyboardInterrupt, which then propagate
            self.elapsed_ms = round((time.monotonic() - self._started_at) * 1000, 2)
            with self._lock:
                self.state = final
                with _claims_lock:
                    if _claims.get(self._data_id) is self:
                        del _claims[self._data_id]
            logger.info("%s %s after %.1f ms", self.algorithm.name, final.value, self.elapsed_ms)

            try:
                if self.on_finish is not None:
                    self.on_finish(self)
            finally:
                done.set()
