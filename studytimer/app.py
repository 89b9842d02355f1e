#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import logging
import sys

from studytimer import config
from studytimer.core.scheduler import BlockingScheduler
from studytimer.domain.durations import DurationConfig
from studytimer.domain.models import Phase, TimerState
from studytimer.services.stats_service import StatsService
from studytimer.services.timer_service import TimerService, format_duration, format_time
from studytimer.storage.db import Database
from studytimer.storage.repos import SessionRepo

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="studytimer", description=config.APP_TITLE)
    p.add_argument("--focus", type=int, default=25, help="focus minutes (5-60)")
    p.add_argument("--short-break", type=int, default=5, help="short break minutes (1-15)")
    p.add_argument("--long-break", type=int, default=15, help="long break minutes (5-30)")
    p.add_argument("--cycles", type=int, default=config.LONG_BREAK_INTERVAL,
                   help="stop after the break that follows this many focus sessions")
    p.add_argument("--auto-start", action="store_true",
                   help="start the next phase without waiting for Enter")
    p.add_argument("--volume", type=int, default=config.DEFAULT_VOLUME)
    p.add_argument("--mute", action="store_true", default=config.START_MUTED)
    p.add_argument("--no-sound", action="store_true", help="do not open an audio device")
    p.add_argument("--db", default=config.DB_PATH, help="SQLite file for session history")
    p.add_argument("--no-db", action="store_true", help="keep history in memory only")
    p.add_argument("--log-level", default=config.LOG_LEVEL)
    return p


def _render(state: TimerState) -> None:
    sys.stdout.write(
        f"\r{state.phase.label:<12} {format_time(state.remaining_seconds)}"
        f"  cycles: {state.cycle_count}   "
    )
    sys.stdout.flush()


def _notify(title: str, description: str) -> None:
    sys.stdout.write("\n")
    print(f"{title} {description}".strip())


def _audio_backend(no_sound: bool):
    if no_sound:
        return None
    from studytimer.audio.pygame_backend import PygameAudioBackend

    return PygameAudioBackend()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config.setup_logging(args.log_level)

    durations = DurationConfig()
    durations.update(Phase.FOCUS, args.focus)
    durations.update(Phase.SHORT_BREAK, args.short_break)
    durations.update(Phase.LONG_BREAK, args.long_break)

    db = None
    repo = None
    if not args.no_db:
        db = Database(db_path=args.db)
        db.init_schema()
        repo = SessionRepo(db)
        log.debug("session history in %s", args.db)

    backend = _audio_backend(args.no_sound)
    scheduler = BlockingScheduler()
    service = TimerService(
        scheduler,
        audio_backend=backend,
        session_repo=repo,
        durations=durations,
        volume=args.volume,
        muted=args.mute,
    )
    service.set_on_state_change(_render)
    service.set_on_notify(_notify)

    try:
        while True:
            snap = service.get_snapshot()
            # the break earned by the last focus runs too
            if snap.cycle_count >= args.cycles and snap.phase == Phase.FOCUS:
                break
            if not args.auto_start:
                input(f"\nPress Enter to start {snap.phase.label} "
                      f"({format_time(snap.remaining_seconds)})...")
            service.start()
            scheduler.run()
    except (KeyboardInterrupt, EOFError):
        service.pause()
        print("\nStopped.")
    finally:
        if backend is not None:
            backend.close()

    for record in service.get_history():
        print(f"{record.phase.label:<12} {format_duration(record.actual_duration_seconds)}"
              f"  {record.completed_at.astimezone():%H:%M}")

    source = repo.list if repo is not None else service.get_history
    summary = StatsService(source).summary()
    print(f"Focus today: {summary['focus_today']} "
          f"in {summary['focus_sessions_today']} sessions")

    if db is not None:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
