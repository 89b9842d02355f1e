# -*- coding: utf-8 -*-

from datetime import datetime, timezone

from studytimer.core.history import SessionHistoryLog
from studytimer.domain.models import Phase, SessionRecord


def rec(phase, minute):
    return SessionRecord(phase, 60, datetime(2024, 1, 1, 10, minute, tzinfo=timezone.utc))


def test_empty():
    log = SessionHistoryLog()
    assert len(log) == 0
    assert log.all() == ()
    assert log.latest() is None


def test_newest_first_and_restartable():
    log = SessionHistoryLog()
    a, b, c = rec(Phase.FOCUS, 1), rec(Phase.SHORT_BREAK, 2), rec(Phase.FOCUS, 3)
    for r in (a, b, c):
        log.append(r)

    assert log.all() == (c, b, a)
    assert list(log) == [c, b, a]
    assert list(log) == [c, b, a]
    assert log.latest() is c


def test_no_dedup():
    log = SessionHistoryLog()
    r = rec(Phase.FOCUS, 1)
    log.append(r)
    log.append(r)
    assert len(log) == 2


def test_snapshot_is_detached():
    log = SessionHistoryLog()
    log.append(rec(Phase.FOCUS, 1))
    snap = log.all()
    log.append(rec(Phase.FOCUS, 2))
    assert len(snap) == 1
