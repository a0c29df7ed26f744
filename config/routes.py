from __future__ import annotations  # Configuration schema for LLM routing

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field

from .settings import settings

REPLY_ROUTE_TARGET = "zone_chat.reply"


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str = "/v1beta/models/{model}:generateContent"
    model: str
    timeout_s: float = Field(ge=0.1)
    api_key_env: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False

    def url_for(self, model: Optional[str] = None) -> str:  # Resolve endpoint URL for a model
        return f"{self.base_url}{self.endpoint.format(model=model or self.model)}"


class AppConfig(BaseModel):  # Application configuration root
    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str] = Field(default_factory=dict)


def load_config(path: Path) -> AppConfig:  # Load configuration from disk
    data = path.read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def resolve_route(cfg: AppConfig, target: str) -> LlmRoute:  # Look up the route bound to a target
    if target not in cfg.registry:
        raise KeyError(f"Registry entry missing for '{target}'")
    route_id = cfg.registry[target]
    if route_id not in cfg.llm_routes:
        raise KeyError(f"Route '{route_id}' missing for '{target}'")
    return cfg.llm_routes[route_id]


def default_route() -> LlmRoute:  # Route from LLM_CONFIG_PATH when set, else from settings
    if settings.LLM_CONFIG_PATH:
        return resolve_route(load_config(Path(settings.LLM_CONFIG_PATH)), REPLY_ROUTE_TARGET)
    return LlmRoute(
        name="gemini",
        base_url=settings.LLM_BASE_URL,
        model=settings.LLM_MODEL,
        timeout_s=settings.LLM_TIMEOUT_S,
        api_key_env=settings.LLM_API_KEY_ENV,
    )
