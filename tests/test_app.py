# -*- coding: utf-8 -*-

import re

from studytimer import app
from studytimer.storage.db import Database
from studytimer.storage.repos import SessionRepo


def test_parser_defaults():
    args = app.build_parser().parse_args([])
    assert args.focus == 25
    assert args.short_break == 5
    assert args.long_break == 15
    assert not args.auto_start


def test_runs_one_cycle_headless(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr("studytimer.core.scheduler.time.sleep", lambda _: None)
    db_path = str(tmp_path / "s.db")

    rc = app.main([
        "--auto-start", "--no-sound", "--cycles", "1",
        "--focus", "5", "--db", db_path, "--log-level", "WARNING",
    ])
    assert rc == 0

    out = capsys.readouterr().out
    assert "Focus session completed!" in out
    assert "Time for a short break!" in out
    assert "Break time is over. Ready to focus again?" in out
    assert "Focus today: 0h 5m in 1 sessions" in out

    db = Database(db_path)
    stored = SessionRepo(db).list()
    db.close()
    assert [r.phase.value for r in stored] == ["shortBreak", "focus"]
    assert stored[1].actual_duration_seconds == 300


def test_interrupt_while_waiting(monkeypatch, capsys):
    def _raise(_prompt):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", _raise)
    rc = app.main(["--no-sound", "--no-db"])
    assert rc == 0
    assert "Stopped." in capsys.readouterr().out


def test_long_break_after_last_cycle_runs(monkeypatch, capsys):
    monkeypatch.setattr("studytimer.core.scheduler.time.sleep", lambda _: None)

    rc = app.main([
        "--auto-start", "--no-sound", "--no-db", "--cycles", "4",
        "--focus", "5", "--short-break", "1", "--long-break", "5",
        "--log-level", "WARNING",
    ])
    assert rc == 0

    out = capsys.readouterr().out
    assert "Time for a long break!" in out
    assert out.rstrip().endswith("Focus today: 0h 20m in 4 sessions")
    history_lines = [
        line for line in out.splitlines()
        if re.match(r"^(Focus|Short Break|Long Break)\s+\d+m \d+s  \d\d:\d\d$", line)
    ]
    assert history_lines[0].startswith("Long Break")
    assert len(history_lines) == 8
