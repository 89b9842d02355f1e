# -*- coding: utf-8 -*-

from studytimer.core.scheduler import BlockingScheduler, ManualScheduler, TkScheduler


class FakeWidget:
    """Stands in for a Tk widget: after() queues, flush() fires due jobs."""

    def __init__(self):
        self.jobs = {}
        self.n = 0

    def after(self, ms, fn):
        self.n += 1
        job = f"after#{self.n}"
        self.jobs[job] = fn
        return job

    def after_cancel(self, job):
        self.jobs.pop(job, None)

    def flush(self):
        pending, self.jobs = self.jobs, {}
        for fn in pending.values():
            fn()


def test_manual_scheduler_cancel_inside_callback():
    s = ManualScheduler()
    calls = []

    def cb():
        calls.append(1)
        if len(calls) == 3:
            s.cancel(handle)

    handle = s.schedule(1000, cb)
    s.advance(10)
    assert len(calls) == 3
    assert s.active == 0
    assert s.cancelled == 1


def test_tk_scheduler_repeats_until_cancelled():
    w = FakeWidget()
    s = TkScheduler(w)
    calls = []
    h = s.schedule(1000, lambda: calls.append(1))
    w.flush()
    w.flush()
    assert len(calls) == 2
    s.cancel(h)
    assert w.jobs == {}
    w.flush()
    assert len(calls) == 2


def test_tk_scheduler_cancel_from_callback():
    w = FakeWidget()
    s = TkScheduler(w)
    calls = []

    def cb():
        calls.append(1)
        s.cancel(h)

    h = s.schedule(1000, cb)
    w.flush()
    w.flush()
    assert calls == [1]
    assert w.jobs == {}


def test_blocking_scheduler_runs_until_empty():
    slept = []
    s = BlockingScheduler(sleep=slept.append)
    calls = []

    def cb():
        calls.append(1)
        if len(calls) == 4:
            s.cancel(h)

    h = s.schedule(1000, cb)
    s.run()
    assert len(calls) == 4
    assert slept == [1.0] * 4


def test_blocking_scheduler_stop():
    s = BlockingScheduler(sleep=lambda _: None)
    calls = []

    def cb():
        calls.append(1)
        s.stop()

    s.schedule(1000, cb)
    s.run()
    assert calls == [1]
