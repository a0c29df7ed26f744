"""Minimal checkpoint persistence for interview flows."""
from __future__ import annotations

import json
import os
from typing import Optional

from config.settings import settings

from .flow import FlowSnapshot


def _checkpoint_path(session_id: str) -> str:
    return os.path.join(settings.CHECKPOINT_DIR, f"{session_id}.json")


def save_checkpoint(snapshot: FlowSnapshot) -> str:
    """Persist a flow snapshot atomically and return the file path."""
    os.makedirs(settings.CHECKPOINT_DIR, exist_ok=True)
    path = _checkpoint_path(snapshot.session_id)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as handle:
        json.dump(snapshot.model_dump(), handle, ensure_ascii=False)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)
    return path


def load_checkpoint(session_id: str) -> Optional[FlowSnapshot]:
    """Load a flow snapshot from disk if present."""
    path = _checkpoint_path(session_id)
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    return FlowSnapshot(**data)
