from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from typing import Any

from changeoverplan.core.models import ChangeoverRecord, SaveResult
from changeoverplan.data.db import Db

logger = logging.getLogger(__name__)


class ChangeoverRepository:
    """Changeover records and app config stored in sqlite."""

    def __init__(self, db: Db):
        self.db = db

    def get_config(self, *, key: str, default: str | None = None) -> str | None:
        key = str(key).strip()
        if not key:
            raise ValueError("config key is empty")
        with self.db.connect() as con:
            row = con.execute("SELECT value FROM app_config WHERE key = ?", (key,)).fetchone()
        if row is None:
            return default
        return str(row[0])

    def set_config(self, *, key: str, value: str) -> None:
        key = str(key).strip()
        if not key:
            raise ValueError("config key is empty")
        with self.db.connect() as con:
            con.execute(
                "INSERT INTO app_config(key, value) VALUES(?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, str(value)),
            )

    def save(self, qco_id: str, record: ChangeoverRecord) -> SaveResult:
        """Insert or replace a changeover under ``qco_id``.

        Database errors are reported in the result rather than raised.
        """
        payload = record.to_dict()
        try:
            with self.db.connect() as con:
                con.execute(
                    """
                    INSERT OR REPLACE INTO changeover (
                        qco_number, line_number, current_style, upcoming_style,
                        total_needed, total_surplus, created_at, payload_json
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        qco_id,
                        record.line_number,
                        record.current_style.style_number,
                        record.upcoming_style.style_number,
                        record.total_needed,
                        record.total_surplus,
                        datetime.now().isoformat(),
                        json.dumps(payload),
                    ),
                )
        except sqlite3.Error:
            logger.exception("Failed to save changeover %s", qco_id)
            return SaveResult(success=False, message="Failed to save data. Check the logs.")

        logger.info("Saved changeover %s", qco_id)
        return SaveResult(success=True, message=f"Successfully saved QCO {qco_id} to database.", id=qco_id)

    def get(self, qco_id: str) -> dict[str, Any] | None:
        with self.db.connect() as con:
            row = con.execute("SELECT payload_json FROM changeover WHERE qco_number = ?", (qco_id,)).fetchone()
        if row is None:
            return None
        return json.loads(row["payload_json"])

    def list_recent(self, *, line_number: str | None = None, limit: int = 20) -> list[dict[str, Any]]:
        sql = (
            "SELECT qco_number, line_number, current_style, upcoming_style, "
            "total_needed, total_surplus, created_at FROM changeover"
        )
        params: list[Any] = []
        if line_number:
            sql += " WHERE line_number = ?"
            params.append(line_number)
        sql += " ORDER BY created_at DESC LIMIT ?"
        params.append(int(limit))
        with self.db.connect() as con:
            rows = con.execute(sql, params).fetchall()
        return [dict(r) for r in rows]
