# -*- coding: utf-8 -*-

import logging
import os
from typing import Dict, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from studytimer.config import CUE_FILES, DEFAULT_VOLUME  # noqa: E402

log = logging.getLogger(__name__)


class PygameAudioBackend:
    """
    pygame.mixer playback. The mixer is opened on first use, so a missing
    device surfaces as an error from play/loop (which the cue controller
    swallows) rather than at construction.
    """

    def __init__(self, cue_files: Optional[Dict[str, str]] = None):
        self.cue_files = dict(cue_files or CUE_FILES)
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._loops: Dict[str, "pygame.mixer.Channel"] = {}
        self._volume = DEFAULT_VOLUME / 100.0

    def _ensure_mixer(self) -> None:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
            log.debug("pygame mixer initialised: %s", pygame.mixer.get_init())

    def _sound(self, cue_id: str) -> "pygame.mixer.Sound":
        snd = self._sounds.get(cue_id)
        if snd is None:
            self._ensure_mixer()
            path = self.cue_files[cue_id]
            snd = pygame.mixer.Sound(path)
            snd.set_volume(self._volume)
            self._sounds[cue_id] = snd
        return snd

    def play(self, cue_id: str) -> None:
        self._sound(cue_id).play()

    def loop(self, cue_id: str, playing: bool) -> None:
        if playing:
            if cue_id in self._loops and self._loops[cue_id].get_busy():
                return
            channel = self._sound(cue_id).play(loops=-1)
            if channel is not None:
                self._loops[cue_id] = channel
        else:
            channel = self._loops.pop(cue_id, None)
            if channel is not None:
                channel.stop()

    def set_volume(self, percent: int) -> None:
        self._volume = max(0, min(100, int(percent))) / 100.0
        for snd in self._sounds.values():
            snd.set_volume(self._volume)

    def close(self) -> None:
        for channel in self._loops.values():
            channel.stop()
        self._loops.clear()
        self._sounds.clear()
        if pygame.mixer.get_init():
            pygame.mixer.quit()
