"""Tests for the deferred priority task queue."""

import pytest

from pipeline.task_queue import DEFAULT_PRIORITY, PriorityTaskQueue


def recorder(log, label):
    """Task that appends its label to log."""

    def task():
        log.append(label)

    return task


class TestPriorityOrder:
    """Tests for drain ordering."""

    def test_ascending_priority_stable_within_tier(self):
        """Priorities [5, 1, 5, 0] drain as 0, 1, first 5, second 5."""
        log = []
        queue = PriorityTaskQueue()
        queue.add_priority(5, recorder(log, "5a"))
        queue.add_priority(1, recorder(log, "1"))
        queue.add_priority(5, recorder(log, "5b"))
        queue.add_priority(0, recorder(log, "0"))

        assert queue.drain() == 4
        assert log == ["0", "1", "5a", "5b"]

    def test_default_priority_runs_after_explicit(self):
        """Tasks added without priority run after prioritised ones."""
        log = []
        queue = PriorityTaskQueue()
        queue.add(recorder(log, "default"))
        queue.add_priority(100, recorder(log, "export"))

        queue.drain()

        assert log == ["export", "default"]
        assert queue.priorities() == []

    def test_priorities_reports_run_order(self):
        queue = PriorityTaskQueue()
        queue.add(lambda: None)
        queue.add_priority(25, lambda: None)
        assert queue.priorities() == [25, DEFAULT_PRIORITY]

    def test_task_added_while_draining_runs_in_order(self):
        """A task queued by a running task is picked up at its priority."""
        log = []
        queue = PriorityTaskQueue()

        def schedule_more():
            log.append("first")
            queue.add_priority(50, recorder(log, "late"))

        queue.add_priority(10, schedule_more)
        queue.add_priority(60, recorder(log, "last"))

        assert queue.drain() == 3
        assert log == ["first", "late", "last"]


class TestDrainFailure:
    """Tests for drain stopping on the first failure."""

    def test_second_task_failure_stops_drain(self):
        """Exactly two tasks run; the rest stay queued."""
        log = []
        queue = PriorityTaskQueue()

        def fail():
            log.append("fail")
            raise RuntimeError("write failed")

        queue.add_priority(1, recorder(log, "ok"))
        queue.add_priority(2, fail)
        queue.add_priority(3, recorder(log, "never"))
        queue.add_priority(4, recorder(log, "never either"))

        with pytest.raises(RuntimeError, match="write failed"):
            queue.drain()

        assert log == ["ok", "fail"]
        assert len(queue) == 2

    def test_drain_empty_is_noop(self):
        queue = PriorityTaskQueue()
        assert queue.drain() == 0
        assert queue.drain() == 0

    def test_runner_receives_each_task(self):
        """A custom runner is used instead of calling tasks directly."""
        seen = []
        queue = PriorityTaskQueue()
        first = recorder([], "a")
        second = recorder([], "b")
        queue.add(second)
        queue.add_priority(0, first)

        queue.drain(seen.append)

        assert seen == [first, second]
