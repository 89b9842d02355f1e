# -*- coding: utf-8 -*-

import logging
from typing import Dict, Optional

from studytimer.config import DEFAULT_DURATIONS, DURATION_BOUNDS
from studytimer.domain.models import Phase

log = logging.getLogger(__name__)


def clamp_seconds(phase: Phase, seconds: int) -> int:
    """Clamp to the phase bounds and snap to the nearest step (ties round up)."""
    lo, hi, step = DURATION_BOUNDS[phase]
    seconds = min(max(int(seconds), lo), hi)
    snapped = lo + ((seconds - lo + step // 2) // step) * step
    return min(snapped, hi)


class DurationConfig:
    """
    Per-phase lengths in seconds.
    Only update() mutates; inputs are clamped, never rejected.
    """

    def __init__(self, durations: Optional[Dict[Phase, int]] = None):
        self._seconds: Dict[Phase, int] = {}
        for phase in Phase:
            value = DEFAULT_DURATIONS[phase]
            if durations and phase in durations:
                value = durations[phase]
            self._seconds[phase] = clamp_seconds(phase, value)

    def seconds(self, phase: Phase) -> int:
        return self._seconds[phase]

    def minutes(self, phase: Phase) -> int:
        return self._seconds[phase] // 60

    def __getitem__(self, phase: Phase) -> int:
        return self._seconds[phase]

    def update(self, phase: Phase, minutes) -> int:
        """Returns the stored duration in seconds."""
        try:
            wanted = round(float(minutes) * 60)
        except (TypeError, ValueError, OverflowError):
            log.debug("ignoring non-numeric duration %r for %s", minutes, phase.value)
            return self._seconds[phase]

        self._seconds[phase] = clamp_seconds(phase, wanted)
        return self._seconds[phase]

    def as_dict(self) -> Dict[Phase, int]:
        return dict(self._seconds)
