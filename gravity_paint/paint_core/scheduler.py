"""
Effect Scheduler
================

Deferred and repeating callbacks on the simulation clock.

Everything runs on the caller's thread: ``run_due(now)`` fires every task whose
time has come, in due-time order, between simulation ticks.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

Callback = Callable[[float], None]


@dataclass(order=True)
class ScheduledTask:
    """
    A pending callback.

    Ordered by (due, seq) so ties fire in scheduling order.
    """
    due: float
    seq: int
    callback: Callback = field(compare=False)
    key: Optional[str] = field(default=None, compare=False)
    interval: Optional[float] = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    @property
    def repeating(self) -> bool:
        return self.interval is not None


class EffectScheduler:
    """
    Min-heap of timed callbacks.

    Callbacks receive the time they were due, not the time ``run_due`` was
    called, so repeated intervals do not drift with frame timing.
    """

    def __init__(self):
        self._heap: List[ScheduledTask] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return sum(1 for task in self._heap if not task.cancelled)

    def call_later(
        self,
        now: float,
        delay: float,
        callback: Callback,
        key: Optional[str] = None
    ) -> ScheduledTask:
        """Run callback once, delay ms after now."""
        task = ScheduledTask(now + delay, next(self._counter), callback, key)
        heapq.heappush(self._heap, task)
        return task

    def call_every(
        self,
        now: float,
        interval: float,
        callback: Callback,
        key: Optional[str] = None
    ) -> ScheduledTask:
        """Run callback every interval ms, first at now + interval."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        task = ScheduledTask(now + interval, next(self._counter), callback, key, interval)
        heapq.heappush(self._heap, task)
        return task

    def cancel(self, task: ScheduledTask) -> None:
        """Cancel a task. Cancelling twice is harmless."""
        task.cancelled = True

    def cancel_key(self, key: str) -> int:
        """Cancel every pending task registered under key."""
        count = 0
        for task in self._heap:
            if task.key == key and not task.cancelled:
                task.cancelled = True
                count += 1
        if count:
            logger.debug("Cancelled %d task(s) keyed %s", count, key)
        return count

    def pending(self, key: Optional[str] = None) -> List[ScheduledTask]:
        """Pending tasks in due order, optionally filtered by key."""
        tasks = sorted(t for t in self._heap if not t.cancelled)
        if key is not None:
            tasks = [t for t in tasks if t.key == key]
        return tasks

    def next_due(self) -> Optional[float]:
        self._drop_cancelled()
        return self._heap[0].due if self._heap else None

    def run_due(self, now: float) -> int:
        """
        Fire every task due at or before now.

        Tasks scheduled by a callback for a time <= now also fire in this call.

        Returns:
            Number of callbacks executed.
        """
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._heap or self._heap[0].due > now:
                break
            task = heapq.heappop(self._heap)
            if task.repeating:
                task.due += task.interval
                task.seq = next(self._counter)
                heapq.heappush(self._heap, task)
            task.callback(task.due - task.interval if task.repeating else task.due)
            fired += 1
        return fired

    def clear(self) -> None:
        self._heap.clear()

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)
