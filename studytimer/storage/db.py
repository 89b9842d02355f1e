# -*- coding: utf-8 -*-

import logging
import os
import sqlite3

log = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        if db_path != ":memory:":
            folder = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(folder, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row

    def init_schema(self):
        cur = self.conn.cursor()

        cur.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                id TEXT PRIMARY KEY,
                phase TEXT NOT NULL,
                duration_sec INTEGER NOT NULL,
                completed_ts REAL NOT NULL
            );
        """)

        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_sessions_completed ON sessions(completed_ts);"
        )
        self.conn.commit()

    def close(self):
        try:
            self.conn.close()
        except sqlite3.Error:
            log.debug("closing %s failed", self.db_path, exc_info=True)
