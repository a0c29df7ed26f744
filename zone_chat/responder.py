"""Reply generation for the zone chat assistant.

The prompt is a single text envelope: zone persona, a trailing window of the
conversation, the new user line and a cue for the assistant to answer. The
text generator is looked up under ``REPLY_KEY`` in the model registry, falling
back to the HTTP gateway. Any failure turns into a friendly fallback line.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from config.registry import REPLY_KEY, get_model
from config.routes import default_route
from config.settings import settings
from llm_gateway import generate

from .greetings import Pick, fallback_reply
from .models import ChatMessage, ZoneChatConfig

logger = logging.getLogger(__name__)

EMPTY_REPLY = "I'm here! What's on your mind?"


def build_prompt(
    zone: ZoneChatConfig,
    user_message: str,
    history: Sequence[ChatMessage],
    *,
    window: Optional[int] = None,
) -> str:
    size = settings.CHAT_HISTORY_WINDOW if window is None else window
    recent = list(history)[-size:] if size > 0 else []
    history_lines = "\n".join(
        f"{'User' if message.role == 'user' else zone.ai_role}: {message.content}" for message in recent
    )
    return (
        f"{zone.system_prompt}\n\n"
        f"Current Zone: {zone.zone_name}\n"
        f"Your Role: {zone.ai_role}\n"
        f"Tone: {zone.tone}\n\n"
        f"Recent Conversation:\n{history_lines}\n\n"
        f"User: {user_message}\n\n"
        f"{zone.ai_role}:"
    )


def _gateway_generator(*, prompt: str, model: Optional[str] = None) -> str:
    return generate(prompt, cfg=default_route(), model=model)


def generate_reply(
    zone: ZoneChatConfig,
    user_message: str,
    history: Sequence[ChatMessage],
    *,
    pick: Optional[Pick] = None,
) -> str:
    """Return assistant text for ``user_message``; never raises."""

    prompt = build_prompt(zone, user_message, history)
    try:
        generator = get_model(REPLY_KEY)
    except KeyError:
        generator = _gateway_generator
    try:
        text = generator(prompt=prompt)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Reply generation failed zone=%s: %s", zone.zone_id, exc)
        return fallback_reply(pick)
    if not isinstance(text, str) or not text.strip():
        return EMPTY_REPLY
    return text.strip()


__all__ = ["EMPTY_REPLY", "build_prompt", "generate_reply"]
