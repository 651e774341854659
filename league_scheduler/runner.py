"""
Running a schedule search off the calling thread with cooperative cancellation.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, Future, wait
from typing import Optional
from .config import LeagueConfig
from .engine import schedule_league
from .models import ScheduleResult


class ScheduleJob:
    """
    A search running on a worker thread.

    ``cancel()`` sets the token the engine polls; the job then finishes with a
    cancelled result. A ``timeout_seconds`` cancels the search automatically.
    """

    def __init__(self, config: LeagueConfig, timeout_seconds: Optional[float] = None):
        self.config = config
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else config.timeout_seconds
        self.cancel_event = threading.Event()
        self._timer: Optional[threading.Timer] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="league-scheduler")
        self._future: Optional[Future] = None

    def start(self) -> "ScheduleJob":
        if self._future is not None:
            raise RuntimeError("Job already started")
        if self.timeout_seconds:
            self._timer = threading.Timer(self.timeout_seconds, self.cancel_event.set)
            self._timer.daemon = True
            self._timer.start()
        self._future = self._executor.submit(schedule_league, self.config, self.cancel_event)
        self._future.add_done_callback(self._finish)
        return self

    def cancel(self) -> None:
        """Ask the search to stop at its next checkpoint."""
        self.cancel_event.set()

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: Optional[float] = None) -> ScheduleResult:
        """Block until the search finishes; re-raises configuration errors."""
        if self._future is None:
            raise RuntimeError("Job not started")
        return self._future.result(timeout=timeout)

    def _finish(self, _future: Future) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._executor.shutdown(wait=False)

    def __enter__(self) -> "ScheduleJob":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
        if self._future is None:
            return
        if exc_type is None:
            self._future.result()
        else:
            wait([self._future])


def run_schedule(config: LeagueConfig, timeout_seconds: Optional[float] = None) -> ScheduleResult:
    """Run a search on a worker thread and wait for it, honouring the timeout."""
    job = ScheduleJob(config, timeout_seconds=timeout_seconds).start()
    return job.result()
