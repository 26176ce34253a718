from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.web import router as web_router
from logging_config import configure_logging
from services.catalog import build_default_catalog


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    catalog = build_default_catalog()
    catalog.on_start()
    try:
        yield
    finally:
        catalog.helper.close()
        build_default_catalog.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Odometer Log",
        description="Records vehicle odometer readings in a local SQLite database.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
