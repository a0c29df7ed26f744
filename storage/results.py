"""Persistence helpers for completed fit interview results."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List

from pydantic import BaseModel

from .sqlite import get_conn


class FitResultPayload(BaseModel):
    session_id: str
    answers: List[str]
    category_scores: Dict[str, int]
    percentages: Dict[str, int]
    top_category: str


def insert_fit_result(**data: Any) -> int:
    """Insert a completed interview result and return its primary key."""

    payload = FitResultPayload(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        cur = conn.cursor()
        cur.execute(
            """INSERT INTO fit_results
               (timestamp, session_id, answers_json, scores_json, percentages_json, top_category)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                timestamp,
                payload.session_id,
                json.dumps(payload.answers),
                json.dumps(payload.category_scores),
                json.dumps(payload.percentages),
                payload.top_category,
            ),
        )
        return int(cur.lastrowid)


def recent_fit_results(limit: int = 20) -> List[Dict[str, Any]]:
    """Return the latest result rows, newest first."""

    with get_conn() as conn:
        rows = conn.execute(
            """SELECT id, timestamp, session_id, answers_json, percentages_json, top_category
               FROM fit_results ORDER BY id DESC LIMIT ?""",
            (limit,),
        ).fetchall()
    return [
        {
            "id": row_id,
            "timestamp": ts,
            "session_id": session_id,
            "answers": json.loads(answers),
            "percentages": json.loads(percentages),
            "top_category": top,
        }
        for row_id, ts, session_id, answers, percentages, top in rows
    ]
