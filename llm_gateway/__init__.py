from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import DEFAULT_TEXT, HttpClient, HttpResponse, LlmGatewayError, generate

__all__ = ["DEFAULT_TEXT", "HttpClient", "HttpResponse", "LlmGatewayError", "generate"]
