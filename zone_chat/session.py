"""Zone chat session manager.

Holds the transcript, active zone persona, window open flag and window
position for one client. Transcript, position and open flag are each written
to the key/value store on every change and read back on construction.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from config.settings import settings
from observability import log_event
from storage.kv import KeyValueStore

from .greetings import QUICK_ACTIONS, Pick, transition_greeting, welcome_message
from .models import ChatMessage, ChatPosition, Role, Viewport, ZoneChatConfig
from .responder import generate_reply
from .zones import DEFAULT_ZONE, zone_config

logger = logging.getLogger(__name__)

TRANSCRIPT_KEY = "transcript"
POSITION_KEY = "chat_position"
OPEN_KEY = "chat_open"

ERROR_REPLY = "Oops, something went wrong. Try again?"

Responder = Callable[[ZoneChatConfig, str, Sequence[ChatMessage]], str]

_TRANSCRIPT = TypeAdapter(List[ChatMessage])


class ChatBusyError(RuntimeError):
    """A reply is already being generated for this session."""


class ChatState(BaseModel):
    session_id: str
    messages: List[ChatMessage]
    zone: ZoneChatConfig
    is_open: bool
    position: ChatPosition
    viewport: Viewport
    in_flight: bool


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatSession:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        session_id: str = "local",
        viewport: Optional[Viewport] = None,
        responder: Optional[Responder] = None,
        pick: Optional[Pick] = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.session_id = session_id
        self._store = store
        self._viewport = viewport or Viewport(width=settings.VIEWPORT_WIDTH, height=settings.VIEWPORT_HEIGHT)
        self._pick = pick
        self._responder = responder or self._default_responder
        self._clock = clock
        self._state_lock = threading.RLock()
        self._send_lock = threading.Lock()
        self._zone = DEFAULT_ZONE
        self._messages = self._load_transcript()
        self._position = self._load_position()
        self._is_open = self._load_open()

    @classmethod
    def for_client(cls, client_id: str, **kwargs) -> "ChatSession":
        store = KeyValueStore(f"{settings.CHAT_NAMESPACE}:{client_id}")
        return cls(store, session_id=client_id, **kwargs)

    def _default_responder(self, zone: ZoneChatConfig, text: str, history: Sequence[ChatMessage]) -> str:
        return generate_reply(zone, text, history, pick=self._pick)

    # -- rehydration ---------------------------------------------------

    def _load_transcript(self) -> List[ChatMessage]:
        raw = self._store.get_json(TRANSCRIPT_KEY, [])
        try:
            return _TRANSCRIPT.validate_python(raw)
        except ValidationError as exc:
            logger.warning("Discarding stored transcript session=%s: %s", self.session_id, exc)
            return []

    def _load_position(self) -> ChatPosition:
        raw = self._store.get_json(POSITION_KEY)
        if raw is None:
            return self.default_position()
        try:
            return ChatPosition.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Discarding stored position session=%s: %s", self.session_id, exc)
            return self.default_position()

    def _load_open(self) -> bool:
        raw = self._store.get_json(OPEN_KEY, False)
        return raw if isinstance(raw, bool) else False

    # -- read access ---------------------------------------------------

    @property
    def messages(self) -> List[ChatMessage]:
        with self._state_lock:
            return list(self._messages)

    @property
    def zone(self) -> ZoneChatConfig:
        return self._zone

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def position(self) -> ChatPosition:
        return self._position

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def in_flight(self) -> bool:
        return self._send_lock.locked()

    def state(self) -> ChatState:
        with self._state_lock:
            return ChatState(
                session_id=self.session_id,
                messages=list(self._messages),
                zone=self._zone,
                is_open=self._is_open,
                position=self._position,
                viewport=self._viewport,
                in_flight=self.in_flight,
            )

    # -- transcript ----------------------------------------------------

    def append_message(self, message: ChatMessage) -> None:
        with self._state_lock:
            self._messages.append(message)
            self._store.set_json(TRANSCRIPT_KEY, _TRANSCRIPT.dump_python(self._messages, mode="json"))

    def add_message(self, role: Role, content: str, *, kind: Optional[str] = None) -> ChatMessage:
        with self._state_lock:
            timestamp = self._clock()
            message = ChatMessage(
                id=f"{kind or role}-{timestamp}-{len(self._messages)}",
                role=role,
                content=content,
                timestamp=timestamp,
            )
            self.append_message(message)
            return message

    def clear(self) -> None:
        with self._state_lock:
            self._messages = []
            self._store.delete(TRANSCRIPT_KEY)
        log_event("chat_clear", self.session_id)

    # -- zone ----------------------------------------------------------

    def set_active_zone(self, config: ZoneChatConfig) -> Optional[ChatMessage]:
        """Make ``config`` the active persona.

        Announces the switch with one transition line when the window is open
        and both the previous and the new zone are real, different zones.
        """

        with self._state_lock:
            previous = self._zone.zone_id
            self._zone = config
            if not (self._is_open and previous and config.zone_id and config.zone_id != previous):
                return None
            message = self.add_message(
                "assistant",
                transition_greeting(config.zone_name, self._pick),
                kind="zone-switch",
            )
        log_event("chat_zone_switch", self.session_id, zone=config.zone_id)
        return message

    def set_zone(self, zone_id: Optional[str]) -> Optional[ChatMessage]:
        return self.set_active_zone(zone_config(zone_id))

    # -- window --------------------------------------------------------

    def set_open(self, is_open: bool) -> Optional[ChatMessage]:
        with self._state_lock:
            was_open = self._is_open
            self._is_open = is_open
            self._store.set_json(OPEN_KEY, is_open)
            if not is_open or was_open or self._messages:
                return None
            message = self.add_message("assistant", welcome_message(self._zone, self._pick), kind="welcome")
        log_event("chat_open", self.session_id, zone=self._zone.zone_id)
        return message

    def _clamp(self, position: ChatPosition) -> ChatPosition:
        max_x = self._viewport.width - settings.CHAT_WINDOW_WIDTH
        max_y = self._viewport.height - settings.CHAT_WINDOW_HEIGHT
        return ChatPosition(
            x=max(0, min(position.x, max_x)),
            y=max(0, min(position.y, max_y)),
        )

    def default_position(self) -> ChatPosition:
        return self._clamp(
            ChatPosition(
                x=self._viewport.width - settings.CHAT_DEFAULT_OFFSET_X,
                y=self._viewport.height - settings.CHAT_DEFAULT_OFFSET_Y,
            )
        )

    def set_position(self, position: ChatPosition) -> ChatPosition:
        with self._state_lock:
            self._position = self._clamp(position)
            self._store.set_json(POSITION_KEY, self._position.model_dump())
            return self._position

    def set_viewport(self, viewport: Viewport) -> ChatPosition:
        """Update the viewport and pull the window back inside it if needed."""

        with self._state_lock:
            self._viewport = viewport
            clamped = self._clamp(self._position)
            if clamped != self._position:
                return self.set_position(clamped)
            return self._position

    # -- conversation --------------------------------------------------

    def send(self, text: str) -> List[ChatMessage]:
        """Append the user's line, generate a reply and append it.

        Returns the user message and the reply this call added; blank input is
        ignored and yields an empty list. Only one send may be in flight; a
        second one raises ``ChatBusyError``. The reply is appended even if the
        zone or the open flag changed while it was being generated.
        """

        content = text.strip()
        if not content:
            return []
        if not self._send_lock.acquire(blocking=False):
            raise ChatBusyError(f"Reply already in flight for session {self.session_id}")
        try:
            with self._state_lock:
                history = list(self._messages)
                zone = self._zone
                asked = self.add_message("user", content)
            try:
                reply = self._responder(zone, content, history)
                outcome = "ok"
            except Exception as exc:  # noqa: BLE001
                logger.error("Responder raised session=%s: %s", self.session_id, exc)
                reply = ERROR_REPLY
                outcome = "error"
            answered = self.add_message("assistant", reply, kind="ai")
        finally:
            self._send_lock.release()
        log_event("chat_send", self.session_id, zone=zone.zone_id, outcome=outcome)
        return [asked, answered]

    def quick_action(self, action_id: str) -> List[ChatMessage]:
        """Append a canned help exchange.

        Raises:
            KeyError: For an unknown action id.
        """

        action = QUICK_ACTIONS[action_id]
        with self._state_lock:
            asked = self.add_message("user", action.label)
            answered = self.add_message("assistant", action.response, kind="quick-action")
        return [asked, answered]


__all__ = ["ChatBusyError", "ChatSession", "ChatState", "ERROR_REPLY", "OPEN_KEY", "POSITION_KEY", "TRANSCRIPT_KEY"]
