# -*- coding: utf-8 -*-

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from studytimer.audio.cues import AudioCueController
from studytimer.config import LONG_BREAK_INTERVAL, TICK_INTERVAL_MS
from studytimer.core.history import SessionHistoryLog
from studytimer.core.scheduler import Scheduler
from studytimer.domain.durations import DurationConfig
from studytimer.domain.models import Phase, SessionRecord, TimerState

log = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_phase(value) -> Optional[Phase]:
    try:
        return Phase(value)
    except ValueError:
        log.warning("ignoring unknown phase %r", value)
        return None


class TimerEngine:
    """
    Focus / break state machine driven by a one-second tick.

    Owns TimerState and the single tick schedule. History and audio are
    notified collaborators; listeners get immutable snapshots.

    Policies:
    - completion switches phase but does not auto-start the next one
    - set_phase() always leaves the timer paused
    """

    def __init__(
        self,
        scheduler: Scheduler,
        durations: Optional[DurationConfig] = None,
        history: Optional[SessionHistoryLog] = None,
        audio: Optional[AudioCueController] = None,
        long_break_interval: int = LONG_BREAK_INTERVAL,
        clock: Callable[[], datetime] = _now,
    ):
        self.scheduler = scheduler
        self.durations = durations if durations is not None else DurationConfig()
        self.history = history if history is not None else SessionHistoryLog()
        self.audio = audio
        self.long_break_interval = max(1, int(long_break_interval))
        self._clock = clock

        self.phase = Phase.FOCUS
        self.remaining_seconds = 0
        # length the current phase started with; records are measured against it
        self._phase_length = 0
        self._load_phase(Phase.FOCUS)
        self.running = False
        self.cycle_count = 0
        self._tick_handle: Any = None

        self._state_listeners: List[Callable[[TimerState], None]] = []
        self._completed_listeners: List[Callable[[SessionRecord], None]] = []
        self._cycle_listeners: List[Callable[[int], None]] = []

    # ----- Events -----
    def on_state_change(self, fn: Callable[[TimerState], None]) -> Callable[[], None]:
        return self._subscribe(self._state_listeners, fn)

    def on_phase_completed(self, fn: Callable[[SessionRecord], None]) -> Callable[[], None]:
        return self._subscribe(self._completed_listeners, fn)

    def on_cycle_incremented(self, fn: Callable[[int], None]) -> Callable[[], None]:
        return self._subscribe(self._cycle_listeners, fn)

    @staticmethod
    def _subscribe(listeners: list, fn) -> Callable[[], None]:
        listeners.append(fn)

        def _unsubscribe() -> None:
            if fn in listeners:
                listeners.remove(fn)

        return _unsubscribe

    def _emit(self, listeners: list, payload) -> None:
        for fn in list(listeners):
            fn(payload)

    def _emit_state(self) -> None:
        self._emit(self._state_listeners, self.get_state())

    # ----- Queries -----
    def get_state(self) -> TimerState:
        return TimerState(
            phase=self.phase,
            remaining_seconds=self.remaining_seconds,
            running=self.running,
            cycle_count=self.cycle_count,
        )

    snapshot = get_state

    def progress(self) -> float:
        """Percent of the current phase already elapsed."""
        total = self.durations.seconds(self.phase)
        if total <= 0:
            return 0.0
        return 100.0 - (self.remaining_seconds / total * 100.0)

    # ----- Commands -----
    def start(self) -> None:
        if self.running:
            return
        if self.remaining_seconds <= 0:
            self._load_phase(self.phase)
        self._set_running(True)
        log.debug("started %s with %ss left", self.phase.value, self.remaining_seconds)
        self._emit_state()

    def pause(self) -> None:
        if not self.running:
            return
        self._set_running(False)
        log.debug("paused %s at %ss", self.phase.value, self.remaining_seconds)
        self._emit_state()

    def reset(self) -> None:
        self._set_running(False)
        self._load_phase(self.phase)
        self._emit_state()

    def set_phase(self, phase: Phase) -> None:
        phase = _coerce_phase(phase)
        if phase is None:
            return
        self._set_running(False)
        self._load_phase(phase)
        self._emit_state()

    def update_duration(self, phase: Phase, minutes) -> None:
        phase = _coerce_phase(phase)
        if phase is None:
            return
        seconds = self.durations.update(phase, minutes)
        if phase == self.phase:
            if not self.running:
                self._load_phase(phase)
            else:
                # running: keep the countdown, but never above the new length
                self.remaining_seconds = min(self.remaining_seconds, seconds)
        self._emit_state()

    def tick(self) -> None:
        if not self.running:
            return

        if self.remaining_seconds > 1:
            self.remaining_seconds -= 1
            self._emit_state()
            return

        self.remaining_seconds = 0
        self._complete_phase()

    # ----- Internals -----
    def _load_phase(self, phase: Phase) -> None:
        self.phase = phase
        self._phase_length = self.durations.seconds(phase)
        self.remaining_seconds = self._phase_length

    def _set_running(self, running: bool) -> None:
        # cancel first: never more than one live schedule
        self._cancel_tick()
        self.running = running
        if running:
            self._tick_handle = self.scheduler.schedule(TICK_INTERVAL_MS, self.tick)
        if self.audio is not None:
            self.audio.set_running(running)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def _complete_phase(self) -> None:
        finished = self.phase
        record = SessionRecord(
            phase=finished,
            actual_duration_seconds=self._phase_length - self.remaining_seconds,
            completed_at=self._clock(),
        )
        self.history.append(record)

        self._set_running(False)

        if self.audio is not None:
            self.audio.play_completion()

        cycle_bumped = False
        if finished == Phase.FOCUS:
            self.cycle_count += 1
            cycle_bumped = True
            if self.cycle_count % self.long_break_interval == 0:
                next_phase = Phase.LONG_BREAK
            else:
                next_phase = Phase.SHORT_BREAK
        else:
            next_phase = Phase.FOCUS

        self._load_phase(next_phase)
        log.info(
            "%s complete (cycle %s), next: %s",
            finished.label,
            self.cycle_count,
            next_phase.label,
        )

        try:
            if cycle_bumped:
                self._emit(self._cycle_listeners, self.cycle_count)
            self._emit(self._completed_listeners, record)
        finally:
            self._emit_state()
