"""SQLite-backed storage for Discord-to-Reddit account links."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional

from app.models.link import AccountLink


class LinkStoreError(Exception):
    """Raised when the underlying database fails."""


class SQLiteLinkStore:
    """Link table keyed by (user_id, reddit_name).

    The composite primary key keeps at most one row per pair even when two
    requests pass the existence check at the same time.
    """

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
                CREATE TABLE IF NOT EXISTS reddit_accounts (
                    user_id TEXT NOT NULL,
                    reddit_name TEXT NOT NULL,
                    linked_at TEXT NOT NULL,
                    PRIMARY KEY (user_id, reddit_name)
                )
                """
            )

    def find_one(self, *, user_id: str, reddit_name: str) -> Optional[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT user_id, reddit_name, linked_at FROM reddit_accounts "
                    "WHERE user_id = ? AND reddit_name = ?",
                    (user_id, reddit_name),
                ).fetchone()
        except sqlite3.Error as exc:
            raise LinkStoreError(f"Failed to look up link {user_id}/{reddit_name}") from exc
        if not row:
            return None
        return dict(row)

    def insert_one(self, link: AccountLink) -> bool:
        """Insert ``link``; returns False when the pair was already stored."""
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO reddit_accounts (user_id, reddit_name, linked_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(user_id, reddit_name) DO NOTHING
                    """,
                    (link.user_id, link.reddit_name, link.linked_at.isoformat()),
                )
        except sqlite3.Error as exc:
            raise LinkStoreError(
                f"Failed to insert link {link.user_id}/{link.reddit_name}"
            ) from exc
        return cursor.rowcount == 1


__all__ = ["LinkStoreError", "SQLiteLinkStore"]
