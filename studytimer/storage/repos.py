# -*- coding: utf-8 -*-

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from studytimer.domain.models import Phase, SessionRecord
from studytimer.storage.db import Database

log = logging.getLogger(__name__)


class SessionRepo:
    """
    SQLite sink for completed phases. Subscribe record() to the engine's
    phase-completed event to keep history across restarts.
    """

    def __init__(self, db: Database):
        self.db = db

    def add(self, record: SessionRecord) -> str:
        sid = str(uuid.uuid4())
        self.db.conn.execute(
            """
            INSERT INTO sessions(id, phase, duration_sec, completed_ts)
            VALUES(?,?,?,?)
            """,
            (
                sid,
                record.phase.value,
                int(record.actual_duration_seconds),
                record.completed_at.timestamp(),
            ),
        )
        self.db.conn.commit()
        return sid

    def record(self, record: SessionRecord) -> None:
        """Listener form of add(): storage errors are logged, not raised."""
        try:
            self.add(record)
        except sqlite3.Error:
            log.exception("failed to store %s session", record.phase.value)

    def list(
        self,
        phase: Optional[Phase] = None,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[SessionRecord]:
        sql = "SELECT phase, duration_sec, completed_ts FROM sessions WHERE 1=1"
        params: list = []
        if phase is not None:
            sql += " AND phase=?"
            params.append(Phase(phase).value)
        if since is not None:
            sql += " AND completed_ts >= ?"
            params.append(since.timestamp())
        sql += " ORDER BY completed_ts DESC, rowid DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))

        rows = self.db.conn.execute(sql, params).fetchall()
        return [
            SessionRecord(
                phase=Phase(r["phase"]),
                actual_duration_seconds=int(r["duration_sec"]),
                completed_at=datetime.fromtimestamp(r["completed_ts"], tz=timezone.utc),
            )
            for r in rows
        ]

    def count(self) -> int:
        row = self.db.conn.execute("SELECT COUNT(1) AS c FROM sessions").fetchone()
        return int(row["c"])
