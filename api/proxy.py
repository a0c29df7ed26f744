"""Server-side proxy to the generative-language API.

Keeps the API key on the server; clients post a finished prompt and get text back.
"""
from __future__ import annotations

import logging
import os

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.schemas import GenerateReq, GenerateResp
from config.routes import default_route
from llm_gateway import LlmGatewayError, generate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/chat", response_model=GenerateResp)
def chat(req: GenerateReq):
    route = default_route()
    if not route.api_key_env or not os.getenv(route.api_key_env):
        return JSONResponse(
            status_code=500,
            content={
                "error": "API key not configured on server",
                "message": f"Please set {route.api_key_env or 'an API key'} in the server environment",
            },
        )
    if not req.prompt:
        return JSONResponse(status_code=400, content={"error": "Prompt is required"})

    try:
        text = generate(req.prompt, cfg=route, model=req.model)
    except LlmGatewayError as exc:
        if exc.status_code is not None:
            logger.error("Upstream generation error status=%s", exc.status_code)
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": "Generation request failed", "details": exc.details},
            )
        logger.error("Generation proxy failure: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error", "message": str(exc)})
    return GenerateResp(text=text)
