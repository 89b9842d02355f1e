# -*- coding: utf-8 -*-

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Phase(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_break(self) -> bool:
        return self is not Phase.FOCUS


_LABELS = {
    Phase.FOCUS: "Focus",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}


@dataclass(frozen=True)
class TimerState:
    phase: Phase
    remaining_seconds: int
    running: bool
    cycle_count: int


@dataclass(frozen=True)
class SessionRecord:
    phase: Phase
    actual_duration_seconds: int
    completed_at: datetime
