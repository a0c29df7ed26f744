"""Zone-scoped chat assistant: personas, transcript state and reply generation."""
from .models import ChatMessage, ChatPosition, Viewport, ZoneChatConfig
from .session import ChatBusyError, ChatSession, ChatState
from .zones import DEFAULT_ZONE, ZONE_CONFIGURATIONS, ZONES, zone_config

__all__ = [
    "ChatMessage",
    "ChatPosition",
    "Viewport",
    "ZoneChatConfig",
    "ChatBusyError",
    "ChatSession",
    "ChatState",
    "DEFAULT_ZONE",
    "ZONE_CONFIGURATIONS",
    "ZONES",
    "zone_config",
]
