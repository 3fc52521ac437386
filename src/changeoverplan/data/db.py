from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path


class Db:
    def __init__(self, path: Path):
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def connect(self):
        con = sqlite3.connect(self.path, timeout=20.0)
        con.row_factory = sqlite3.Row
        try:
            yield con
            con.commit()
        except Exception:
            con.rollback()
            raise
        finally:
            con.close()

    def ensure_schema(self) -> None:
        with self.connect() as con:
            con.execute("PRAGMA journal_mode=WAL;")

            con.executescript(
                """
                CREATE TABLE IF NOT EXISTS app_config (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS changeover (
                    qco_number TEXT PRIMARY KEY,
                    line_number TEXT NOT NULL,
                    current_style TEXT NOT NULL,
                    upcoming_style TEXT NOT NULL,
                    total_needed INTEGER NOT NULL DEFAULT 0,
                    total_surplus INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    payload_json TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_changeover_line
                    ON changeover(line_number, created_at);
                """
            )
