# -*- coding: utf-8 -*-

import time
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional

from studytimer.domain.models import Phase, SessionRecord


def _start_of_today_ts() -> int:
    now = time.time()
    lt = time.localtime(now)
    start = time.mktime(
        (
            lt.tm_year,
            lt.tm_mon,
            lt.tm_mday,
            0,
            0,
            0,
            lt.tm_wday,
            lt.tm_yday,
            lt.tm_isdst,
        )
    )
    return int(start)


def format_hours(seconds: int) -> str:
    minutes = max(0, int(seconds)) // 60
    return f"{minutes // 60}h {minutes % 60}m"


class StatsService:
    """
    Dashboard totals over completed sessions.
    `source` returns the records to aggregate (history log, SQLite repo, ...).
    """

    def __init__(self, source: Callable[[], Iterable[SessionRecord]]):
        self.source = source

    def _records(self, since_ts: Optional[float] = None) -> Iterable[SessionRecord]:
        for r in self.source():
            if since_ts is not None and r.completed_at.timestamp() < since_ts:
                continue
            yield r

    def total_sec(self, phase: Phase, since_ts: Optional[float] = None) -> int:
        return sum(
            r.actual_duration_seconds for r in self._records(since_ts) if r.phase == phase
        )

    def total_today_focus_sec(self) -> int:
        return self.total_sec(Phase.FOCUS, since_ts=_start_of_today_ts())

    def focus_sessions_today(self) -> int:
        since = _start_of_today_ts()
        return sum(1 for r in self._records(since) if r.phase == Phase.FOCUS)

    def totals_by_phase(self, since_ts: Optional[float] = None) -> Dict[Phase, int]:
        totals = {p: 0 for p in Phase}
        for r in self._records(since_ts):
            totals[r.phase] += r.actual_duration_seconds
        return totals

    def summary(self) -> Dict[str, object]:
        focus_today = self.total_today_focus_sec()
        return {
            "focus_sessions_today": self.focus_sessions_today(),
            "focus_today_sec": focus_today,
            "focus_today": format_hours(focus_today),
            "now_ts": int(datetime.now(timezone.utc).timestamp()),
        }
