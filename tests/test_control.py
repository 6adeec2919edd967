"""Tests for the step protocol, cooperative run control and the controller."""

import threading
import time

import pytest

from algoviz.algorithms.pathfinding import AStar
from algoviz.algorithms.sorting import BubbleSort, MergeSort, QuickSort
from algoviz.algorithms.traversal import GraphBFS, RecursiveDFS
from algoviz.elements import make_elements, values_of
from algoviz.engine import (
    RunControl,
    RunController,
    RunInProgressError,
    RunRecorder,
    RunState,
    StepBuilder,
    compare,
    drive,
    resolve_delay,
)
from algoviz.graph import Graph


class CancelAfter:
    """on_step that cancels `control` once `n` steps have been seen."""

    def __init__(self, control, n):
        self.control = control
        self.n = n
        self.steps = []

    def __call__(self, step):
        self.steps.append(step)
        if len(self.steps) == self.n:
            self.control.cancel()


class Gate:
    """on_step that blocks on the first step until released."""

    def __init__(self):
        self.first = threading.Event()
        self.release = threading.Event()
        self.count = 0

    def __call__(self, step):
        self.count += 1
        self.first.set()
        self.release.wait(5)


# --------------------------------------------------------------------------- #
#                               StepBuilder / drive                            #
# --------------------------------------------------------------------------- #
class TestStepBuilder:
    def test_numbers_steps_and_copies_visited(self):
        sb = StepBuilder(data="grid")
        visited = ["A"]
        first = sb.build("one", visited=visited)
        visited.append("B")
        second = sb.build("two", is_final=True)
        assert (first.step_number, second.step_number) == (0, 1)
        assert first.visited == ["A"]
        assert second.data == "grid" and second.is_final

    def test_snapshot_function(self):
        sb = StepBuilder(data=[1, 2], snapshot=list)
        step = sb.build("x")
        assert step.data == [1, 2] and step.data is not sb.data


class TestDrive:
    def test_returns_generator_value(self):
        def gen():
            yield StepBuilder().build("only")
            return 42

        seen = []
        outcome = drive(gen(), seen.append)
        assert outcome.completed and outcome.result == 42
        assert [s.message for s in seen] == ["only"]

    def test_cancel_closes_the_generator(self):
        closed = []

        def gen():
            sb = StepBuilder()
            try:
                for i in range(100):
                    yield sb.build(str(i))
            finally:
                closed.append(True)

        control = RunControl()
        on_step = CancelAfter(control, 3)
        outcome = drive(gen(), on_step, control)
        assert not outcome.completed
        assert outcome.last_step.message == "2"
        assert len(on_step.steps) == 3
        assert closed == [True]

    def test_callback_required(self):
        with pytest.raises(TypeError):
            drive(iter([]), None)


# --------------------------------------------------------------------------- #
#                                 RunControl                                   #
# --------------------------------------------------------------------------- #
class TestRunControl:
    def test_checkpoint_blocks_while_paused(self):
        control = RunControl()
        control.pause()
        returned = threading.Event()

        def worker():
            control.checkpoint()
            returned.set()

        t = threading.Thread(target=worker, daemon=True)
        t.start()
        assert not returned.wait(0.2)
        control.resume()
        assert returned.wait(2)
        t.join(2)

    def test_repeated_resume_is_harmless(self):
        control = RunControl()
        control.resume()
        control.resume()
        assert not control.is_paused
        assert control.checkpoint() is False

    def test_cancel_wakes_a_paused_run(self):
        control = RunControl()
        control.pause()
        result = []
        t = threading.Thread(target=lambda: result.append(control.checkpoint()), daemon=True)
        t.start()
        time.sleep(0.05)
        control.cancel()
        t.join(2)
        assert result == [True]

    def test_cancel_interrupts_pacing(self):
        control = RunControl(delay=30)
        result = []
        t = threading.Thread(target=lambda: result.append(control.checkpoint()), daemon=True)
        t.start()
        time.sleep(0.05)
        started = time.monotonic()
        control.cancel()
        t.join(5)
        assert result == [True]
        assert time.monotonic() - started < 5

    def test_negative_delay_is_clamped(self):
        assert RunControl(delay=-1).delay == 0.0


# --------------------------------------------------------------------------- #
#                          Cancellation results                                #
# --------------------------------------------------------------------------- #
class TestBestEffortResults:
    def test_cancelled_sort_returns_a_permutation(self):
        control = RunControl()
        values = [9, 8, 7, 6, 5, 4, 3, 2, 1]
        elements = make_elements(values)
        on_step = CancelAfter(control, 5)
        result = BubbleSort().sort(elements, on_step, control)
        assert result is elements
        assert sorted(values_of(result)) == sorted(values)
        assert len(on_step.steps) == 5
        assert not on_step.steps[-1].is_final

    def test_cancelled_pathfinding_returns_empty(self, open_grid):
        control = RunControl()
        assert AStar().find_path(open_grid, CancelAfter(control, 4), control) == []

    def test_cancelled_traversal_returns_visited_so_far(self):
        control = RunControl()
        on_step = CancelAfter(control, 3)
        order = GraphBFS().traverse(Graph.sample(), "A", on_step, control)
        assert order == on_step.steps[-1].visited
        assert 0 < len(order) < 6

    def test_pacing_does_not_change_the_outcome(self):
        fast, paced = RunRecorder(), RunRecorder()
        QuickSort().sort(make_elements([5, 2, 8, 1, 9]), fast)
        QuickSort().sort(make_elements([5, 2, 8, 1, 9]), paced, RunControl(delay=0.001))
        assert fast.messages() == paced.messages()


# --------------------------------------------------------------------------- #
#                                RunController                                 #
# --------------------------------------------------------------------------- #
class TestRunController:
    def test_runs_to_completion(self):
        recorder = RunRecorder()
        finished = []
        ctrl = RunController(on_step=recorder, speed=0, on_finish=finished.append)
        elements = make_elements([3, 1, 2])
        ctrl.run_sort(MergeSort(), elements)
        assert ctrl.wait(5)
        assert ctrl.state is RunState.FINISHED
        assert values_of(ctrl.outcome()) == [1, 2, 3]
        assert ctrl.last_step.is_final
        assert finished == [ctrl]

    def test_pathfinding_and_traversal(self, open_grid):
        ctrl = RunController(speed=0)
        ctrl.run_pathfinding(AStar(), open_grid)
        assert ctrl.wait(5)
        assert len(ctrl.outcome()) == 9

        ctrl.run_traversal(RecursiveDFS(), Graph.sample(), "A")
        assert ctrl.wait(5)
        assert [n.id for n in ctrl.outcome()] == ["A", "B", "D", "C", "E", "F"]

    def test_pause_and_resume(self):
        gate = Gate()
        ctrl = RunController(on_step=gate, speed=0)
        ctrl.run_sort(BubbleSort(), make_elements([4, 3, 2, 1]))
        assert gate.first.wait(5)

        assert ctrl.pause()
        assert ctrl.is_paused
        gate.release.set()
        assert not ctrl.wait(0.2)
        assert gate.count == 1

        assert ctrl.resume()
        assert ctrl.wait(5)
        assert ctrl.state is RunState.FINISHED
        assert gate.count > 1

    def test_toggle_pause(self):
        gate = Gate()
        ctrl = RunController(on_step=gate, speed=0)
        ctrl.run_sort(BubbleSort(), make_elements([2, 1]))
        assert gate.first.wait(5)
        assert ctrl.toggle_pause() and ctrl.is_paused
        assert ctrl.toggle_pause() and not ctrl.is_paused
        gate.release.set()
        assert ctrl.wait(5)

    def test_cancel(self):
        gate = Gate()
        ctrl = RunController(on_step=gate, speed=0)
        ctrl.run_sort(BubbleSort(), make_elements([4, 3, 2, 1]))
        assert gate.first.wait(5)
        assert ctrl.cancel()
        gate.release.set()
        assert ctrl.wait(5)
        assert ctrl.state is RunState.CANCELLED
        assert gate.count == 1
        assert not ctrl.cancel()

    def test_controls_are_noops_when_idle(self):
        ctrl = RunController()
        assert not ctrl.pause()
        assert not ctrl.resume()
        assert not ctrl.cancel()
        assert ctrl.wait(0)

    def test_one_active_run_per_controller(self):
        gate = Gate()
        ctrl = RunController(on_step=gate, speed=0)
        ctrl.run_sort(BubbleSort(), make_elements([2, 1]))
        assert gate.first.wait(5)
        with pytest.raises(RunInProgressError):
            ctrl.run_sort(BubbleSort(), make_elements([2, 1]))
        ctrl.cancel()
        gate.release.set()
        assert ctrl.wait(5)

        ctrl.run_sort(BubbleSort(), make_elements([2, 1]))
        assert ctrl.wait(5)
        assert ctrl.state is RunState.FINISHED

    def test_one_active_run_per_data_model(self):
        gate = Gate()
        elements = make_elements([3, 2, 1])
        first = RunController(on_step=gate, speed=0)
        second = RunController(speed=0)
        first.run_sort(BubbleSort(), elements)
        assert gate.first.wait(5)
        with pytest.raises(RunInProgressError):
            second.run_sort(QuickSort(), elements)

        first.cancel()
        gate.release.set()
        assert first.wait(5)
        second.run_sort(QuickSort(), elements)
        assert second.wait(5)
        assert values_of(elements) == [1, 2, 3]

    def test_worker_exception_is_stored_and_reraised(self):
        def explode(step):
            raise RuntimeError("display went away")

        ctrl = RunController(on_step=explode, speed=0)
        ctrl.run_sort(BubbleSort(), make_elements([2, 1]))
        assert ctrl.wait(5)
        assert ctrl.state is RunState.FAILED
        with pytest.raises(RuntimeError, match="display went away"):
            ctrl.outcome()

    @pytest.mark.filterwarnings("ignore::pytest.PytestUnhandledThreadExceptionWarning")
    def test_system_exit_in_callback_still_releases_the_data(self):
        def leave(step):
            raise SystemExit

        elements = make_elements([2, 1])
        ctrl = RunController(on_step=leave, speed=0)
        ctrl.run_sort(BubbleSort(), elements)
        assert ctrl.wait(5)
        assert ctrl.state is RunState.FAILED

        other = RunController(speed=0)
        other.run_sort(BubbleSort(), elements)
        assert other.wait(5)
        assert values_of(elements) == [1, 2]

    def test_next_run_waits_for_on_finish(self):
        names = []

        def slow_finish(ctrl):
            time.sleep(0.3)
            names.append(ctrl.algorithm.name)

        ctrl = RunController(speed=0, on_finish=slow_finish)
        ctrl.run_sort(BubbleSort(), make_elements([2, 1]))
        deadline = time.monotonic() + 5
        while ctrl.is_active and time.monotonic() < deadline:
            time.sleep(0.01)

        ctrl.run_sort(MergeSort(), make_elements([2, 1]))
        assert ctrl.wait(5)
        assert names == ["Bubble Sort", "Merge Sort"]

    def test_none_data_is_a_type_error(self):
        with pytest.raises(TypeError):
            RunController().run_sort(BubbleSort(), None)

    def test_speed(self):
        assert resolve_delay("fast") == 0.15
        assert resolve_delay(None) == resolve_delay("medium")
        assert resolve_delay(-3) == 0.0
        with pytest.raises(ValueError):
            resolve_delay("warp")
        ctrl = RunController(speed="slow")
        assert ctrl.delay == 1.0
        assert ctrl.set_speed(0.25) == 0.25


# --------------------------------------------------------------------------- #
#                                  Recorder                                    #
# --------------------------------------------------------------------------- #
class TestRecorder:
    def test_bounded_history_still_counts_every_step(self):
        recorder = RunRecorder(history=3)
        BubbleSort().sort(make_elements([5, 4, 3, 2, 1]), recorder)
        assert len(recorder.steps) == 3
        assert recorder.total_steps > 3
        assert recorder.last_step.is_final

    def test_metrics(self):
        recorder = RunRecorder()
        algo = BubbleSort()
        result = algo.sort(make_elements([2, 1]), recorder)
        metrics = recorder.finish(algo, result)
        assert metrics.algo_key == "bubble"
        assert metrics.algo_name == "Bubble Sort"
        assert metrics.result_size == 2
        assert metrics.completed and not metrics.cancelled
        assert metrics.final_message == "Bubble Sort completed!"
        assert recorder.metrics() is metrics

    def test_compare(self, sample_graph):
        left, right = RunRecorder(), RunRecorder()
        bfs, dfs = GraphBFS(), RecursiveDFS()
        left.finish(bfs, bfs.shortest_path(sample_graph, "A", "F", left))
        right.finish(dfs, dfs.traverse(sample_graph, "A", right))
        result = compare(left, right)
        assert result.winner_result == "Breadth-First Search"
        assert result.winner_steps in ("Breadth-First Search", "Depth-First Search (Recursive)", "tie")

    def test_compare_tie(self):
        left, right = RunRecorder(), RunRecorder()
        for rec in (left, right):
            algo = MergeSort()
            rec.finish(algo, algo.sort(make_elements([2, 1]), rec))
        result = compare(left, right)
        assert result.winner_steps == "tie"
        assert result.winner_result == "tie"
