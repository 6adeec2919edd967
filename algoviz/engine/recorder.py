"""
recorder.py — Run Recorder & Analytics
========================================
Records the Steps of a run and computes the metrics an analytics panel
or comparison view needs.

Usage:
    rec = RunRecorder()
    result = BubbleSort().sort(elements, rec)
    rec.finish(BubbleSort(), result)
    metrics = rec.metrics()

The recorder is itself the `on_step` callback.  It is thread-safe: the
worker appends while the HTTP layer reads.

Comparison Mode:
    Record two runs on equal inputs, then compare(rec1, rec2).
"""

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, List, Optional

from algoviz.engine.step import Step


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics view renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_name:     str   = ""
    total_steps:   int   = 0         # Steps seen, including ones dropped from history
    result_size:   int   = 0         # len(path) / len(order) / len(array)
    completed:     bool  = False
    cancelled:     bool  = False
    wall_time_ms:  float = 0.0
    final_message: str   = ""


@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    winner_steps:  str = ""   # which run needed fewer steps
    winner_result: str = ""   # which run produced the shorter result (path / order)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class RunRecorder:
    """
    Attributes:
        history : Max number of steps kept (None = keep all).  Older steps
                  are dropped, but still counted in total_steps.
    """

    def __init__(self, history: Optional[int] = None):
        self.history = history
        self._lock   = threading.Lock()
        self.reset()

    def reset(self) -> None:
        self._steps:      Deque[Step]    = deque(maxlen=self.history)
        self._total:      int            = 0
        self._last:       Optional[Step] = None
        self._started_at: Optional[float] = None
        self._metrics:    Optional[RunMetrics] = None

    # ------------------------------------------------------------------
    # on_step callback
    # ------------------------------------------------------------------
    def __call__(self, step: Step) -> None:
        with self._lock:
            if self._started_at is None:
                self._started_at = time.monotonic()
            self._steps.append(step)
            self._total += 1
            self._last = step

    # ------------------------------------------------------------------
    # Finishing
    # ------------------------------------------------------------------
    def finish(self, algorithm: Any, result: Any, cancelled: bool = False) -> RunMetrics:
        """Freeze the metrics for a run that has returned `result`."""
        with self._lock:
            started = self._started_at or time.monotonic()
            last = self._last
            self._metrics = RunMetrics(
                algo_key=getattr(algorithm, "key", ""),
                algo_name=getattr(algorithm, "name", ""),
                total_steps=self._total,
                result_size=len(result) if result is not None else 0,
                completed=not cancelled,
                cancelled=cancelled,
                wall_time_ms=round((time.monotonic() - started) * 1000, 2),
                final_message=last.message if last else "",
            )
            return self._metrics

    def metrics(self) -> Optional[RunMetrics]:
        return self._metrics

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def steps(self) -> List[Step]:
        with self._lock:
            return list(self._steps)

    @property
    def last_step(self) -> Optional[Step]:
        return self._last

    @property
    def total_steps(self) -> int:
        return self._total

    def messages(self) -> List[str]:
        return [s.message for s in self.steps]


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunRecorder, right: RunRecorder) -> ComparisonResult:
    """Given two finished recorders, produce a ComparisonResult."""
    l = left.metrics()  or RunMetrics()
    r = right.metrics() or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_name if l_val < r_val else r.algo_name

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps),
        winner_result=winner(l.result_size, r.result_size),
    )
