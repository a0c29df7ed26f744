import pytest

from storage.sqlite import get_conn
from zone_chat import ChatBusyError, ChatPosition, ChatSession, Viewport, zone_config
from zone_chat.greetings import GENERIC_WELCOME, QUICK_ACTIONS, TRANSITION_TEMPLATES, WELCOME_MESSAGES
from zone_chat.session import ERROR_REPLY


def _echo(zone, text, history):
    return f"{zone.ai_role} heard: {text}"


def _session(store, **kwargs):
    kwargs.setdefault("responder", _echo)
    kwargs.setdefault("pick", lambda n: 0)
    return ChatSession(store, **kwargs)


def test_fresh_session_defaults(store):
    session = _session(store, viewport=Viewport(width=1280, height=800))
    assert session.messages == []
    assert session.is_open is False
    assert session.zone.zone_id is None
    assert session.position == ChatPosition(x=860, y=230)
    assert session.in_flight is False


def test_position_is_clamped_to_viewport(store):
    session = _session(store, viewport=Viewport(width=1024, height=768))
    stored = session.set_position(ChatPosition(x=-50, y=99999))
    assert stored.x == 0
    assert stored.y == 768 - 560


def test_shrinking_viewport_pulls_window_inside(store):
    session = _session(store, viewport=Viewport(width=1280, height=800))
    session.set_position(ChatPosition(x=880, y=240))
    session.set_viewport(Viewport(width=1000, height=700))
    assert session.position == ChatPosition(x=600, y=140)


def test_opening_empty_chat_adds_zone_welcome(store):
    session = _session(store)
    session.set_zone("reading")
    welcome = session.set_open(True)
    assert welcome.role == "assistant"
    assert welcome.content == WELCOME_MESSAGES["reading"][0]
    assert session.set_open(True) is None
    session.set_open(False)
    assert session.set_open(True) is None
    assert len(session.messages) == 1


def test_opening_without_zone_uses_generic_greeting(store):
    session = _session(store)
    assert session.set_open(True).content == GENERIC_WELCOME


def test_zone_switch_while_open_announces_new_zone(store):
    session = _session(store)
    session.set_zone("reading")
    session.set_open(True)
    before = len(session.messages)

    message = session.set_zone("writing")
    assert message is not None
    assert message.content == "Hey! Switched to Writing Zone. What's up?"
    assert len(session.messages) == before + 1
    assert session.zone.zone_name == "Writing Zone"


def test_zone_switch_uses_random_template(store):
    session = ChatSession(store, responder=_echo)
    session.set_zone("speaking")
    session.set_open(True)
    message = session.set_zone("business")
    expected = {template.format(zone_name="Business Ideas") for template in TRANSITION_TEMPLATES}
    assert message.content in expected


@pytest.mark.parametrize(
    "first, second, open_window",
    [
        (None, "reading", True),
        ("reading", "reading", True),
        ("reading", None, True),
        ("reading", "games", False),
    ],
)
def test_zone_changes_without_announcement(store, first, second, open_window):
    session = _session(store)
    session.set_zone(first)
    if open_window:
        session.set_open(True)
    before = len(session.messages)
    assert session.set_zone(second) is None
    assert len(session.messages) == before
    assert session.zone == zone_config(second)


def test_state_survives_reload(store):
    session = _session(store, viewport=Viewport(width=1280, height=800))
    session.set_open(True)
    session.set_position(ChatPosition(x=100, y=120))
    session.send("Hello!")

    reloaded = _session(store, viewport=Viewport(width=1280, height=800))
    assert reloaded.is_open is True
    assert reloaded.position == ChatPosition(x=100, y=120)
    assert [m.content for m in reloaded.messages] == [m.content for m in session.messages]
    assert reloaded.zone.zone_id is None


def test_clear_only_drops_transcript(store):
    session = _session(store)
    session.set_open(True)
    session.set_position(ChatPosition(x=10, y=20))
    session.clear()
    assert session.messages == []

    reloaded = _session(store)
    assert reloaded.messages == []
    assert reloaded.is_open is True
    assert reloaded.position == ChatPosition(x=10, y=20)


def test_malformed_storage_falls_back_to_defaults(store):
    with get_conn() as conn:
        for key, value in (
            ("transcript", "{not json"),
            ("chat_position", '{"x": "left"}'),
            ("chat_open", '"yes"'),
        ):
            conn.execute(
                "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (f"{store.namespace}:{key}", value, "now"),
            )

    session = _session(store, viewport=Viewport(width=1280, height=800))
    assert session.messages == []
    assert session.position == ChatPosition(x=860, y=230)
    assert session.is_open is False


def test_send_appends_user_and_reply(store):
    seen = {}

    def responder(zone, text, history):
        seen["history"] = [m.content for m in history]
        return "Nice!"

    session = _session(store, responder=responder)
    session.add_message("assistant", "Earlier line")
    asked, reply = session.send("  I read a chapter today  ")

    assert asked.content == "I read a chapter today"
    assert reply.content == "Nice!"
    assert [m.role for m in session.messages] == ["assistant", "user", "assistant"]
    assert session.messages[1].content == "I read a chapter today"
    assert seen["history"] == ["Earlier line"]
    assert len({m.id for m in session.messages}) == 3


def test_blank_send_is_ignored(store):
    session = _session(store)
    assert session.send("   ") == []
    assert session.messages == []


def test_second_send_while_in_flight_is_rejected(store):
    observed = {}
    holder = {}

    def responder(zone, text, history):
        observed["in_flight"] = holder["session"].in_flight
        try:
            holder["session"].send("again")
        except ChatBusyError:
            observed["rejected"] = True
        return "done"

    session = _session(store, responder=responder)
    holder["session"] = session
    session.send("first")

    assert observed == {"in_flight": True, "rejected": True}
    assert [m.content for m in session.messages] == ["first", "done"]
    assert session.in_flight is False


def test_late_reply_is_still_appended(store):
    holder = {}

    def responder(zone, text, history):
        holder["session"].set_zone("games")
        holder["session"].set_open(False)
        return "late answer"

    session = _session(store, responder=responder)
    holder["session"] = session
    session.set_zone("reading")
    session.set_open(True)
    session.send("hello")
    assert session.messages[-1].content == "late answer"
    assert session.zone.zone_id == "games"


def test_responder_exception_becomes_error_reply(store):
    def responder(zone, text, history):
        raise RuntimeError("boom")

    session = _session(store, responder=responder)
    _, reply = session.send("hello")
    assert reply.content == ERROR_REPLY
    assert session.in_flight is False


def test_default_responder_uses_bound_model(store, fake_reply):
    session = ChatSession(store, pick=lambda n: 0)
    session.set_zone("business")
    _, reply = session.send("Coffee cart idea")
    assert reply.content == "Sounds lovely, tell me more."
    assert "Current Zone: Business Ideas" in fake_reply[0]


def test_quick_action_appends_canned_exchange(store):
    session = _session(store)
    asked, answered = session.quick_action("stuck")
    assert asked.role == "user" and asked.content == QUICK_ACTIONS["stuck"].label
    assert answered.role == "assistant" and answered.content == QUICK_ACTIONS["stuck"].response
    with pytest.raises(KeyError):
        session.quick_action("dance")


def test_unmigrated_database_falls_back_to_defaults(tmp_db, monkeypatch):
    import os

    from config.settings import settings
    from storage.kv import KeyValueStore

    monkeypatch.setattr(settings, "DB_PATH", os.path.join(os.path.dirname(tmp_db), "fresh.db"))
    session = _session(KeyValueStore("zone_chat:fresh"), viewport=Viewport(width=1280, height=800))

    assert session.messages == []
    assert session.is_open is False
    assert session.position == ChatPosition(x=860, y=230)

    asked, reply = session.send("still works")
    assert reply.content == "Zone Assistant heard: still works"
    session.clear()
    assert session.messages == []


def test_send_returns_only_its_own_messages(store):
    holder = {}

    def responder(zone, text, history):
        holder["session"].add_message("assistant", "from elsewhere")
        return "mine"

    session = _session(store, responder=responder)
    holder["session"] = session
    added = session.send("hi")
    assert [m.content for m in added] == ["hi", "mine"]
    assert [m.content for m in session.messages] == ["hi", "from elsewhere", "mine"]
