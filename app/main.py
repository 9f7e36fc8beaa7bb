from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.web import router as web_router
from logging_config import configure_logging
from sources.purpleair import build_default_client


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    client = build_default_client()
    try:
        yield
    finally:
        client.close()
        build_default_client.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="PurpleAir AQI",
        description="EPA-corrected AQI, severity level and trend for PurpleAir sensors.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
