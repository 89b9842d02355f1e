# -*- coding: utf-8 -*-

import logging
from typing import List, Protocol, Tuple

from studytimer.config import CUE_ALARM, CUE_TICKING, DEFAULT_VOLUME

log = logging.getLogger(__name__)


class AudioBackend(Protocol):
    def play(self, cue_id: str) -> None:
        ...

    def loop(self, cue_id: str, playing: bool) -> None:
        ...

    def set_volume(self, percent: int) -> None:
        ...


class NullAudioBackend:
    """Silent backend. Remembers calls so hosts/tests can inspect them."""

    def __init__(self):
        self.calls: List[Tuple] = []

    def play(self, cue_id: str) -> None:
        self.calls.append(("play", cue_id))

    def loop(self, cue_id: str, playing: bool) -> None:
        self.calls.append(("loop", cue_id, playing))

    def set_volume(self, percent: int) -> None:
        self.calls.append(("volume", percent))


def _clamp_percent(percent) -> int:
    try:
        value = int(round(float(percent)))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_VOLUME
    return max(0, min(100, value))


class AudioCueController:
    """
    Ambient ticking loop + one-shot alarm.

    The loop plays iff running and not muted. Backend errors stop here:
    a missed cue is logged, never raised to the engine.
    """

    def __init__(
        self,
        backend: AudioBackend,
        volume: int = DEFAULT_VOLUME,
        muted: bool = False,
        ambient_cue: str = CUE_TICKING,
        alarm_cue: str = CUE_ALARM,
    ):
        self.backend = backend
        self.ambient_cue = ambient_cue
        self.alarm_cue = alarm_cue

        self.volume = _clamp_percent(volume)
        self.muted = bool(muted)
        self.running = False
        self._looping = False

        self._safe("set_volume", self.volume)

    @property
    def looping(self) -> bool:
        return self._looping

    # ----- Commands -----
    def set_running(self, running: bool) -> None:
        self.running = bool(running)
        self._sync_loop()

    def set_muted(self, muted: bool) -> None:
        self.muted = bool(muted)
        self._sync_loop()

    def set_volume(self, percent) -> None:
        self.volume = _clamp_percent(percent)
        # applies to the loop in place; no restart
        self._safe("set_volume", self.volume)

    def play_completion(self) -> None:
        if self.muted:
            return
        self._safe("play", self.alarm_cue)

    # ----- Internals -----
    def _sync_loop(self) -> None:
        want = self.running and not self.muted
        if want == self._looping:
            return
        self._looping = want
        self._safe("loop", self.ambient_cue, want)

    def _safe(self, method: str, *args) -> None:
        try:
            getattr(self.backend, method)(*args)
        except Exception:
            log.warning("audio backend %s%r failed", method, args, exc_info=True)
