"""Canned assistant lines: welcomes, zone-switch greetings, fallbacks and quick actions.

All random choices go through a ``Pick`` callable that returns an index in
``range(n)``, so callers can pin the choice.
"""
from __future__ import annotations

import random
from typing import Callable, Dict, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from .models import ZoneChatConfig

Pick = Callable[[int], int]


def uniform_pick(n: int) -> int:
    return random.randrange(n)


TRANSITION_TEMPLATES: Tuple[str, ...] = (
    "Hey! Switched to {zone_name}. What's up?",
    "Cool, {zone_name} now. What can I help with?",
    "Alright, we're in {zone_name}. Ready when you are!",
    "{zone_name} mode activated. How can I help?",
)

GENERIC_WELCOME = "Hey there! Pick a zone and let's get started. I'm here to help! 👋"

WELCOME_MESSAGES: Dict[str, Tuple[str, ...]] = {
    "reading": (
        "Hey! Ready to read something interesting?",
        "Welcome to Reading Zone! What catches your eye?",
        "Let's find something good to read together!",
    ),
    "speaking": (
        "Hey! Want to chat about anything?",
        "Welcome! Let's practice some conversation.",
        "Ready to talk? I'm all ears!",
    ),
    "writing": (
        "Hey! Feeling creative today?",
        "Welcome to Writing Zone! Got any ideas brewing?",
        "Let's write something fun together!",
    ),
    "memory": (
        "Hey! Ready for some brain games?",
        "Welcome! Let's make memory practice fun.",
        "Ready to flex that memory?",
    ),
    "games": (
        "Hey! Let's play something!",
        "Welcome to Game Zone! What sounds fun?",
        "Ready for some wordplay?",
    ),
    "business": (
        "Hey! Got any cool ideas today?",
        "Welcome! Let's brainstorm something awesome.",
        "Ready to explore some business ideas?",
    ),
}

FALLBACK_REPLIES: Tuple[str, ...] = (
    "Hmm, lost my train of thought. What were you saying?",
    "My brain glitched for a sec. Can you say that again?",
    "Connection hiccup! Mind repeating that?",
    "Oops, didn't catch that. Try again?",
)


class QuickAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    response: str


QUICK_ACTIONS: Dict[str, QuickAction] = {
    action.id: action
    for action in (
        QuickAction(
            id="help",
            label="How does this work?",
            response=(
                "ZONE is designed to be your safe practice space. Choose a zone that interests you, select a "
                "service, and start practicing. There are no grades, no timers, and no judgment. You can "
                "restart or switch zones anytime!"
            ),
        ),
        QuickAction(
            id="progress",
            label="Where is my progress?",
            response=(
                "Your progress is private and stored locally. You can track your journey in each zone, but "
                "remember - this is about growth, not competition. Take your time and enjoy the process!"
            ),
        ),
        QuickAction(
            id="stuck",
            label="I feel stuck",
            response=(
                "It's completely normal to feel stuck sometimes. Try starting with a different service, take a "
                "short break, or switch to another zone. Remember, you're here to explore and learn at your own "
                "pace - there's no pressure!"
            ),
        ),
    )
}


def _choose(templates: Sequence[str], pick: Optional[Pick]) -> str:
    return templates[(pick or uniform_pick)(len(templates))]


def transition_greeting(zone_name: str, pick: Optional[Pick] = None) -> str:
    return _choose(TRANSITION_TEMPLATES, pick).format(zone_name=zone_name)


def welcome_message(zone: ZoneChatConfig, pick: Optional[Pick] = None) -> str:
    if zone.zone_id is None:
        return GENERIC_WELCOME
    return _choose(WELCOME_MESSAGES[zone.zone_id], pick)


def fallback_reply(pick: Optional[Pick] = None) -> str:
    return _choose(FALLBACK_REPLIES, pick)


__all__ = [
    "Pick",
    "uniform_pick",
    "TRANSITION_TEMPLATES",
    "GENERIC_WELCOME",
    "WELCOME_MESSAGES",
    "FALLBACK_REPLIES",
    "QuickAction",
    "QUICK_ACTIONS",
    "transition_greeting",
    "welcome_message",
    "fallback_reply",
]
