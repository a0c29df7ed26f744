import os
import sys
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.chat_routes import reset_sessions
from config.registry import REPLY_KEY, bind_model, unbind_model
from config.settings import settings
from storage.kv import KeyValueStore
from storage.migrate import migrate


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    monkeypatch.setattr(settings, "CHECKPOINT_DIR", os.path.join(td.name, "checkpoints"), raising=False)
    migrate(db_path)
    reset_sessions()
    try:
        yield db_path
    finally:
        unbind_model(REPLY_KEY)
        reset_sessions()
        td.cleanup()


@pytest.fixture
def store():
    return KeyValueStore("zone_chat:test")


@pytest.fixture
def first_pick():
    return lambda n: 0


@pytest.fixture
def fake_reply():
    calls = []

    def _reply(*, prompt: str, **_):
        calls.append(prompt)
        return "Sounds lovely, tell me more."

    bind_model(REPLY_KEY, _reply)
    return calls
