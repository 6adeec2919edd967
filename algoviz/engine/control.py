"""
control.py — Cooperative Run Control
=====================================
The checkpoint every algorithm stops at after each step notification.

    control = RunControl(delay=0.2)
    # worker thread:
    algorithm.sort(elements, on_step, control)
    # any other thread:
    control.pause(); control.resume(); control.cancel()

Nothing here preempts the algorithm.  A unit of work (one sift, one
relaxation) always completes; the checkpoint only runs between steps:

    1. pacing   – wait `delay` seconds (returns early on cancel)
    2. pause    – block on the run's Condition until resume() / cancel()
    3. cancel   – report True so the driver closes the generator

Pacing lives here, not in the algorithms, so it can only change
wall-clock timing, never the sequence of steps.
"""

import threading
from dataclasses import dataclass
from typing import Any, Generator, Optional

from algoviz.engine.step import Step, StepCallback


class RunControl:
    """
    Pause / resume / cancel signals scoped to one run.

    Attributes:
        delay : Seconds to wait at every checkpoint (0 = run flat out).
                May be changed while the run is in progress.
    """

    def __init__(self, delay: float = 0.0):
        self.delay: float = max(0.0, delay)
        self._condition   = threading.Condition()
        self._paused      = False
        self._cancelled   = threading.Event()

    # ------------------------------------------------------------------
    # Signals (called from the controlling thread)
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._condition:
            self._paused = True

    def resume(self) -> None:
        # repeated resumes collapse into one: the flag is simply cleared
        with self._condition:
            self._paused = False
            self._condition.notify_all()

    def cancel(self) -> None:
        self._cancelled.set()
        with self._condition:
            self._condition.notify_all()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    # ------------------------------------------------------------------
    # Checkpoint (called from the worker, right after on_step)
    # ------------------------------------------------------------------
    def checkpoint(self) -> bool:
        """Apply pacing and pause.  Returns True when the run must stop."""
        if self.delay > 0 and self._cancelled.wait(self.delay):
            return True
        with self._condition:
            while self._paused and not self._cancelled.is_set():
                self._condition.wait()
        return self._cancelled.is_set()


# ---------------------------------------------------------------------------
# Driver shared by every algorithm family
# ---------------------------------------------------------------------------
@dataclass
class DriveResult:
    result:    Any            = None    # generator return value (None if cancelled)
    last_step: Optional[Step] = None
    completed: bool           = False


def drive(
    steps: Generator[Step, None, Any],
    on_step: StepCallback,
    control: Optional[RunControl] = None,
) -> DriveResult:
    """
    Pull every Step out of an algorithm generator, hand it to `on_step`
    and stop at the checkpoint.  On cancellation the generator is closed
    (its finally-blocks run) and `completed` is False.
    """
    if on_step is None:
        raise TypeError("on_step callback is required")

    last: Optional[Step] = None
    while True:
        try:
            step = next(steps)
        except StopIteration as stop:
            return DriveResult(result=stop.value, last_step=last, completed=True)

        last = step
        on_step(step)

        if control is not None and control.checkpoint():
            steps.close()
            return DriveResult(result=None, last_step=last, completed=False)
