"""
engine/
-------
Step protocol, cooperative run control and the threaded controller.

    from algoviz.engine import Step, RunControl, RunController, RunRecorder
"""

from algoviz.engine.step       import Step, StepBuilder, StepCallback
from algoviz.engine.control    import RunControl, DriveResult, drive
from algoviz.engine.controller import (
    RunController,
    RunState,
    RunInProgressError,
    resolve_delay,
)
from algoviz.engine.recorder   import RunRecorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Step",
    "StepBuilder",
    "StepCallback",
    "RunControl",
    "DriveResult",
    "drive",
    "RunController",
    "RunState",
    "RunInProgressError",
    "resolve_delay",
    "RunRecorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
