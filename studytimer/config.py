# -*- coding: utf-8 -*-

import logging
import os

from studytimer.domain.models import Phase

APP_TITLE = "Study Timer"

DATA_DIR = os.getenv("STUDYTIMER_HOME") or os.path.join(
    os.path.expanduser("~"), ".studytimer"
)
DB_PATH = os.getenv("STUDYTIMER_DB") or os.path.join(DATA_DIR, "sessions.db")

# phase -> (min_sec, max_sec, step_sec)
DURATION_BOUNDS = {
    Phase.FOCUS: (5 * 60, 60 * 60, 5 * 60),
    Phase.SHORT_BREAK: (1 * 60, 15 * 60, 1 * 60),
    Phase.LONG_BREAK: (5 * 60, 30 * 60, 5 * 60),
}

DEFAULT_DURATIONS = {
    Phase.FOCUS: 25 * 60,
    Phase.SHORT_BREAK: 5 * 60,
    Phase.LONG_BREAK: 15 * 60,
}

LONG_BREAK_INTERVAL = 4
TICK_INTERVAL_MS = 1000


def env_percent(name: str, default: int) -> int:
    """Read a 0..100 setting; unparsable values fall back to default."""
    try:
        value = int(round(float(os.getenv(name, default))))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(0, min(100, value))


DEFAULT_VOLUME = env_percent("STUDYTIMER_VOLUME", 70)
START_MUTED = os.getenv("STUDYTIMER_MUTED", "").lower() in ("1", "true", "yes")

SOUNDS_DIR = os.getenv("STUDYTIMER_SOUNDS") or os.path.join(DATA_DIR, "sounds")
CUE_TICKING = "ticking"
CUE_ALARM = "alarm"
CUE_FILES = {
    CUE_TICKING: os.path.join(SOUNDS_DIR, "ticking.mp3"),
    CUE_ALARM: os.path.join(SOUNDS_DIR, "notification.mp3"),
}

LOG_LEVEL = os.getenv("STUDYTIMER_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
