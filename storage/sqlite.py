"""SQLite connection helper shared by the key/value store and fit result rows."""
from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from config.settings import settings


@contextmanager
def get_conn() -> Iterator[sqlite3.Connection]:
    """Open ``settings.DB_PATH`` for one unit of work.

    Serves the ``kv_store`` slots behind chat sessions and the ``fit_results``
    history. The parent directory is created on demand; the transaction
    commits when the block exits cleanly and the connection is always closed.
    """

    path = settings.DB_PATH
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
