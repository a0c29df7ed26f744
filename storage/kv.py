"""Namespaced JSON key/value persistence backed by SQLite."""
from __future__ import annotations

import datetime as dt
import json
import logging
import sqlite3
from typing import Any, Optional

from .sqlite import get_conn

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Durable JSON slots keyed by ``<namespace>:<key>``.

    Every write overwrites the whole value. Reads never raise: a missing row,
    malformed JSON or an unreadable database yields ``default``. Writes are
    best-effort and log instead of raising when the database is unusable.
    """

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get_json(self, key: str, default: Any = None) -> Any:
        try:
            raw = self._read(key)
        except sqlite3.Error as exc:
            logger.warning("Store read failed key=%s: %s", self._full_key(key), exc)
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Malformed stored value key=%s: %s", self._full_key(key), exc)
            return default

    def set_json(self, key: str, value: Any) -> None:
        timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
        try:
            with get_conn() as conn:
                conn.execute(
                    """INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",
                    (self._full_key(key), json.dumps(value, ensure_ascii=False), timestamp),
                )
        except sqlite3.Error as exc:
            logger.error("Store write failed key=%s: %s", self._full_key(key), exc)

    def delete(self, key: str) -> None:
        try:
            with get_conn() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (self._full_key(key),))
        except sqlite3.Error as exc:
            logger.error("Store delete failed key=%s: %s", self._full_key(key), exc)

    def _read(self, key: str) -> Optional[str]:
        with get_conn() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (self._full_key(key),)).fetchone()
        return None if row is None else row[0]


__all__ = ["KeyValueStore"]
