# -*- coding: utf-8 -*-

import itertools
import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol

log = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Repeating tick source. One handle per schedule() call."""

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class ManualScheduler:
    """
    Deterministic clock for tests and headless hosts.
    advance(n) fires every live schedule n times, one second at a time.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._jobs: Dict[int, Callable[[], None]] = {}
        self.cancelled = 0

    @property
    def active(self) -> int:
        return len(self._jobs)

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._jobs[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        if self._jobs.pop(handle, None) is not None:
            self.cancelled += 1

    def advance(self, seconds: int = 1) -> None:
        for _ in range(int(seconds)):
            # callbacks may cancel or reschedule while we iterate
            for handle, fn in list(self._jobs.items()):
                if handle in self._jobs:
                    fn()


class TkScheduler:
    """Tick source on a Tk widget's event loop (after / after_cancel)."""

    def __init__(self, widget):
        self.widget = widget
        self._jobs: Dict[int, Optional[str]] = {}
        self._ids = itertools.count(1)

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)

        def _fire():
            if handle not in self._jobs:
                return
            # re-arm before running so the callback can cancel us
            self._jobs[handle] = self.widget.after(interval_ms, _fire)
            callback()

        self._jobs[handle] = self.widget.after(interval_ms, _fire)
        return handle

    def cancel(self, handle: int) -> None:
        job = self._jobs.pop(handle, None)
        if job is not None:
            try:
                self.widget.after_cancel(job)
            except Exception:
                log.debug("after_cancel failed for %s", job, exc_info=True)


class BlockingScheduler:
    """
    Sleep-driven loop for the console host.
    run() returns once no schedule is left (or stop() was called).
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None):
        self._sleep = sleep or time.sleep
        self._jobs: Dict[int, Callable[[], None]] = {}
        self._intervals: Dict[int, int] = {}
        self._ids = itertools.count(1)
        self._stopped = False

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._jobs[handle] = callback
        self._intervals[handle] = interval_ms
        return handle

    def cancel(self, handle: int) -> None:
        self._jobs.pop(handle, None)
        self._intervals.pop(handle, None)

    def stop(self) -> None:
        self._stopped = True

    def run(self) -> None:
        self._stopped = False
        while self._jobs and not self._stopped:
            interval_ms = min(self._intervals.values())
            self._sleep(interval_ms / 1000.0)
            for handle, fn in list(self._jobs.items()):
                if handle in self._jobs:
                    fn()
