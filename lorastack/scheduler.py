"""A cooperative job scheduler driven by a tick clock.

Jobs are either immediately runnable (run in the order they were queued) or
timed (run in deadline order once their deadline has been reached). A job is
in at most one queue at a time; scheduling it again moves it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .timebase import time_diff

__all__ = ["Job", "Scheduler"]


@dataclass(eq=False)
class Job:
    """A unit of work; ``func`` is called with the job itself when it runs."""

    func: Optional[Callable[["Job"], None]] = None
    deadline: int = 0

    def is_timed(self) -> bool:
        """Return True if the job carries a deadline rather than running at once."""
        return self.deadline != 0


class Scheduler:
    """Run queue plus deadline-ordered timer queue."""

    def __init__(self, clock: Callable[[], int]) -> None:
        self._clock = clock
        self._runnable: list[Job] = []
        self._scheduled: list[Job] = []

    def now(self) -> int:
        """Return the current tick count from the clock."""
        return self._clock()

    def _queue_of(self, job: Job) -> list[Job]:
        return self._scheduled if job.is_timed() else self._runnable

    def _unlink(self, job: Job) -> bool:
        queue = self._queue_of(job)
        for position, queued in enumerate(queue):
            if queued is job:
                del queue[position]
                return True
        return False

    def set_callback(self, job: Job, func: Callable[[Job], None]) -> None:
        """Queue *job* to run as soon as possible, after already runnable jobs."""
        self._unlink(job)
        job.deadline = 0
        job.func = func
        self._runnable.append(job)

    def set_timed_callback(
        self, job: Job, time: int, func: Callable[[Job], None]
    ) -> None:
        """Queue *job* to run once the clock reaches *time*.

        A time of 0 is taken as 1, since a zero deadline marks a job as
        immediately runnable.
        """
        if time == 0:
            time = 1
        self._unlink(job)
        job.deadline = time
        job.func = func
        position = next(
            (
                index
                for index, queued in enumerate(self._scheduled)
                if time_diff(queued.deadline, time) > 0
            ),
            len(self._scheduled),
        )
        self._scheduled.insert(position, job)

    def clear_callback(self, job: Job) -> None:
        """Remove *job* from whichever queue holds it, if any."""
        self._unlink(job)

    def run_once(self) -> bool:
        """Run at most one job; return True if a job was run."""
        if self._runnable:
            job = self._runnable.pop(0)
        elif self._scheduled and time_diff(
            self._scheduled[0].deadline, self.now()
        ) <= 0:
            job = self._scheduled.pop(0)
        else:
            return False
        if job.func is not None:
            job.func(job)
        return True

    def run(self, max_iterations: Optional[int] = None) -> int:
        """Call :meth:`run_once` repeatedly and return how many jobs ran.

        With ``max_iterations`` of None the loop never ends.
        """
        if max_iterations is not None and max_iterations < 0:
            raise ValueError("max_iterations must not be negative")
        executed = 0
        iterations = 0
        while max_iterations is None or iterations < max_iterations:
            if self.run_once():
                executed += 1
            iterations += 1
        return executed

    def query_time_critical_jobs(self, time: int) -> bool:
        """Return True if a timed job is due within *time* ticks from now."""
        if not self._scheduled:
            return False
        return time_diff(self._scheduled[0].deadline, self.now()) < time