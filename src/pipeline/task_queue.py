"""Deferred work queue drained after every book has been generated."""

import heapq
import itertools
import sys
from collections.abc import Callable

Task = Callable[[], None]

# Tasks added without a priority run after every explicitly prioritised task
DEFAULT_PRIORITY = sys.maxsize


class PriorityTaskQueue:
    """Priority ordered list of deferred tasks.

    Lower priority values run first. Tasks with equal priority run in the
    order they were added.

    Example:
        >>> queue = PriorityTaskQueue()
        >>> queue.add_priority(100, write_export)
        >>> queue.add(cleanup)
        >>> queue.drain()
        2
    """

    def __init__(self):
        self._heap: list[tuple[int, int, Task]] = []
        self._counter = itertools.count()

    def add(self, task: Task) -> "PriorityTaskQueue":
        """Queue a task at the default (lowest) precedence."""
        return self.add_priority(DEFAULT_PRIORITY, task)

    def add_priority(self, priority: int, task: Task) -> "PriorityTaskQueue":
        """Queue a task at an explicit priority."""
        heapq.heappush(self._heap, (priority, next(self._counter), task))
        return self

    def __len__(self) -> int:
        return len(self._heap)

    def priorities(self) -> list[int]:
        """Priorities of the queued tasks in the order they will run."""
        return [priority for priority, _, _ in sorted(self._heap)]

    def drain(self, runner: Callable[[Task], None] | None = None) -> int:
        """Run every queued task in priority order.

        Each task is removed from the queue before it runs, so tasks queued
        while draining are picked up in their priority position. If a task
        raises, the exception propagates and the remaining tasks stay queued.

        Args:
            runner: Called with each task instead of calling the task directly

        Returns:
            Number of tasks run
        """
        count = 0
        while self._heap:
            _, _, task = heapq.heappop(self._heap)
            count += 1
            if runner is None:
                task()
            else:
                runner(task)
        return count
