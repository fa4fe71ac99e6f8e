"""SQLite-backed substitute for the DynamoDB token table."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional


class SQLiteStore:
    """Simple key-value store using a table keyed by (user_id, token_type)."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS oauth_tokens (
                    user_id TEXT NOT NULL,
                    token_type TEXT NOT NULL,
                    data TEXT NOT NULL,
                    PRIMARY KEY (user_id, token_type)
                )
                """
            )

    def put_item(self, item: Dict[str, Any]) -> None:
        user_id = item.get("userId")
        token_type = item.get("tokenType")
        if not user_id or not token_type:
            raise ValueError("Item must include 'userId' and 'tokenType' keys")

        data_json = json.dumps(item)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO oauth_tokens (user_id, token_type, data)
                VALUES (?, ?, ?)
                ON CONFLICT(user_id, token_type) DO UPDATE SET data = excluded.data
                """,
                (user_id, token_type, data_json),
            )

    def get_item(self, *, user_id: str, token_type: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT data FROM oauth_tokens WHERE user_id = ? AND token_type = ?",
                (user_id, token_type),
            ).fetchone()
        if not row:
            return None
        return json.loads(row["data"])


__all__ = ["SQLiteStore"]
