"""Configuration package for the ZONE services."""
from .registry import REPLY_KEY, bind_model, get_model, unbind_model
from .routes import AppConfig, LlmRoute, default_route, load_config, resolve_route
from .settings import Settings, settings

__all__ = [
    "AppConfig",
    "LlmRoute",
    "default_route",
    "load_config",
    "resolve_route",
    "REPLY_KEY",
    "bind_model",
    "get_model",
    "unbind_model",
    "Settings",
    "settings",
]
