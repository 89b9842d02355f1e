# -*- coding: utf-8 -*-

from datetime import datetime, timedelta, timezone

import pytest

from studytimer.audio.cues import AudioCueController, NullAudioBackend
from studytimer.core.history import SessionHistoryLog
from studytimer.core.scheduler import ManualScheduler
from studytimer.core.timer_engine import TimerEngine
from studytimer.domain.durations import DurationConfig


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def backend():
    return NullAudioBackend()


@pytest.fixture
def audio(backend):
    return AudioCueController(backend, volume=70)


@pytest.fixture
def engine(scheduler, audio):
    return TimerEngine(
        scheduler,
        durations=DurationConfig(),
        history=SessionHistoryLog(),
        audio=audio,
        clock=FakeClock(),
    )
