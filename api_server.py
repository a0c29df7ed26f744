from __future__ import annotations  # FastAPI server exposing the fit interview and zone chat

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.chat_routes import router as chat_router
from api.interview_routes import router as interview_router
from api.proxy import router as proxy_router
from config.settings import settings
from storage.migrate import migrate


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:  # Ensure the schema exists before serving
    migrate(settings.DB_PATH)
    logger.info("ZONE API ready db=%s", settings.DB_PATH)
    yield


def create_app() -> FastAPI:  # Assemble routers and middleware
    application = FastAPI(title="ZONE API", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(interview_router)
    application.include_router(chat_router)
    application.include_router(proxy_router)
    return application


app = create_app()
