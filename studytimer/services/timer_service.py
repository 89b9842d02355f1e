# -*- coding: utf-8 -*-

import logging
from typing import Callable, List, Optional, Tuple

from studytimer.audio.cues import AudioBackend, AudioCueController, NullAudioBackend
from studytimer.config import DEFAULT_VOLUME, START_MUTED
from studytimer.core.history import SessionHistoryLog
from studytimer.core.scheduler import Scheduler
from studytimer.core.timer_engine import TimerEngine
from studytimer.domain.durations import DurationConfig
from studytimer.domain.models import Phase, SessionRecord, TimerState
from studytimer.storage.repos import SessionRepo

log = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    m = max(0, seconds) // 60
    s = max(0, seconds) % 60
    return f"{m:02d}:{s:02d}"


def format_duration(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60}m {seconds % 60}s"


def completion_messages(record: SessionRecord, state: TimerState) -> List[Tuple[str, str]]:
    """Toast (title, description) pairs for a finished phase."""
    if record.phase == Phase.FOCUS:
        n = state.cycle_count
        noun = "session" if n == 1 else "sessions"
        msgs = [
            (
                "Focus session completed!",
                f"Great job! You've completed {n} {noun} today.",
            )
        ]
        if state.phase == Phase.LONG_BREAK:
            msgs.append(("", "Time for a long break!"))
        else:
            msgs.append(("", "Time for a short break!"))
        return msgs
    return [("", "Break time is over. Ready to focus again?")]


class TimerService:
    """
    Orchestrates:
    - TimerEngine state + tick schedule
    - audio cues (mute / volume)
    - optional SQLite session logging
    - callbacks for the UI (state snapshots, toasts)
    """

    def __init__(
        self,
        scheduler: Scheduler,
        audio_backend: Optional[AudioBackend] = None,
        session_repo: Optional[SessionRepo] = None,
        durations: Optional[DurationConfig] = None,
        volume: int = DEFAULT_VOLUME,
        muted: bool = START_MUTED,
    ):
        self.audio = AudioCueController(
            audio_backend if audio_backend is not None else NullAudioBackend(),
            volume=volume,
            muted=muted,
        )
        self.history = SessionHistoryLog()
        self.engine = TimerEngine(
            scheduler,
            durations=durations,
            history=self.history,
            audio=self.audio,
        )
        self.session_repo = session_repo

        self._on_state_change: Optional[Callable[[TimerState], None]] = None
        self._on_notify: Optional[Callable[[str, str], None]] = None

        self.engine.on_state_change(self._emit_state_change)
        self.engine.on_phase_completed(self._handle_phase_completed)
        if self.session_repo is not None:
            self.engine.on_phase_completed(self.session_repo.record)

    # ----- Callbacks -----
    def set_on_state_change(self, fn: Callable[[TimerState], None]) -> None:
        self._on_state_change = fn

    def set_on_notify(self, fn: Callable[[str, str], None]) -> None:
        self._on_notify = fn

    def on_phase_completed(self, fn: Callable[[SessionRecord], None]) -> Callable[[], None]:
        return self.engine.on_phase_completed(fn)

    def on_cycle_incremented(self, fn: Callable[[int], None]) -> Callable[[], None]:
        return self.engine.on_cycle_incremented(fn)

    def _emit_state_change(self, state: TimerState) -> None:
        if self._on_state_change:
            self._on_state_change(state)

    def _handle_phase_completed(self, record: SessionRecord) -> None:
        if not self._on_notify:
            return
        # engine has already moved to the next phase when this fires
        for title, description in completion_messages(record, self.engine.get_state()):
            self._on_notify(title, description)

    # ----- Public API -----
    def get_snapshot(self) -> TimerState:
        return self.engine.get_state()

    def get_history(self) -> Tuple[SessionRecord, ...]:
        return self.history.all()

    def progress(self) -> float:
        return self.engine.progress()

    def display_time(self) -> str:
        return format_time(self.engine.remaining_seconds)

    def start(self) -> None:
        self.engine.start()

    def pause(self) -> None:
        self.engine.pause()

    def toggle(self) -> None:
        if self.engine.running:
            self.engine.pause()
        else:
            self.engine.start()

    def reset(self) -> None:
        self.engine.reset()

    def set_phase(self, phase: Phase) -> None:
        self.engine.set_phase(phase)

    def update_duration(self, phase: Phase, minutes: int) -> None:
        self.engine.update_duration(phase, minutes)

    def set_muted(self, muted: bool) -> None:
        self.audio.set_muted(muted)

    def toggle_mute(self) -> None:
        self.audio.set_muted(not self.audio.muted)

    def set_volume(self, percent: int) -> None:
        self.audio.set_volume(percent)
