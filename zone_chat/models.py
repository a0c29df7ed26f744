"""Data model for zone chat transcripts and window state."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]
ZoneId = Literal["reading", "speaking", "writing", "memory", "games", "business"]


class ChatMessage(BaseModel):
    id: str
    role: Role
    content: str
    timestamp: int  # epoch milliseconds


class ChatPosition(BaseModel):
    x: float
    y: float


class Viewport(BaseModel):
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class ZoneChatConfig(BaseModel):
    """Persona the assistant adopts for the active zone."""

    model_config = ConfigDict(frozen=True)

    zone_id: Optional[ZoneId] = None
    zone_name: str
    ai_role: str
    tone: str
    system_prompt: str
