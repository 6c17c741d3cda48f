"""Local scan result store using SQLite."""

from __future__ import annotations

import json
import sqlite3
import time
import uuid
from dataclasses import dataclass
from typing import Any

from .models import FileAnalysisResult, UrlAnalysisResult, result_as_dict

FILE_SCAN = "file"
URL_SCAN = "url"


@dataclass
class ScanStore:
    path: str

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.execute(
            "CREATE TABLE IF NOT EXISTS scans ("
            "id TEXT PRIMARY KEY,"
            "kind TEXT NOT NULL,"
            "payload TEXT NOT NULL,"
            "created_at INTEGER NOT NULL"
            ")"
        )
        return conn

    def save(self, result: FileAnalysisResult | UrlAnalysisResult) -> str:
        kind = FILE_SCAN if isinstance(result, FileAnalysisResult) else URL_SCAN
        scan_id = uuid.uuid4().hex
        payload = json.dumps(result_as_dict(result))
        now = int(time.time())
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO scans(id, kind, payload, created_at) VALUES (?, ?, ?, ?)",
                (scan_id, kind, payload, now),
            )
        return scan_id

    def get(self, scan_id: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            cur = conn.execute(
                "SELECT id, kind, payload, created_at FROM scans WHERE id=?",
                (scan_id,),
            )
            row = cur.fetchone()
        if not row:
            return None
        return _row_to_dict(row)

    def delete(self, scan_id: str) -> bool:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM scans WHERE id=?", (scan_id,))
            return cur.rowcount > 0

    def list(self, kind: str | None = None, limit: int = 50) -> list[dict[str, Any]]:
        query = "SELECT id, kind, payload, created_at FROM scans"
        params: tuple[Any, ...] = ()
        if kind:
            query += " WHERE kind=?"
            params = (kind,)
        query += " ORDER BY created_at DESC, rowid DESC LIMIT ?"
        with self._connect() as conn:
            rows = conn.execute(query, params + (limit,)).fetchall()
        return [_row_to_dict(row) for row in rows]


def _row_to_dict(row: tuple[str, str, str, int]) -> dict[str, Any]:
    scan_id, kind, payload, created_at = row
    return {
        "id": scan_id,
        "kind": kind,
        "created_at": created_at,
        "result": json.loads(payload),
    }
