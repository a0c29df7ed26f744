"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/zone.db")
    CHECKPOINT_DIR: str = Field(default="data/checkpoints")

    CHAT_NAMESPACE: str = "zone_chat"
    CHAT_WINDOW_WIDTH: int = 400
    CHAT_WINDOW_HEIGHT: int = 560
    CHAT_DEFAULT_OFFSET_X: int = 420
    CHAT_DEFAULT_OFFSET_Y: int = 570
    VIEWPORT_WIDTH: int = 1280
    VIEWPORT_HEIGHT: int = 800
    CHAT_HISTORY_WINDOW: int = Field(default=6, ge=0)

    TRANSITION_DELAY_MS: int = Field(default=300, ge=0)

    LLM_BASE_URL: str = "https://generativelanguage.googleapis.com"
    LLM_MODEL: str = "gemini-2.0-flash-exp"
    LLM_TIMEOUT_S: float = Field(default=30.0, ge=0.1)
    LLM_API_KEY_ENV: str = "GEMINI_API_KEY"
    LLM_CONFIG_PATH: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
