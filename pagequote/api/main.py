"""FastAPI application factory.

Assembles CORS and all API routers.  This module is the authoritative app
object; pagequote/main.py re-exports it.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pagequote.api.deps import shutdown_worker
from pagequote.api.routes.analysis import router as analysis_router
from pagequote.api.routes.health import router as health_router
from pagequote.api.routes.quotes import router as quotes_router
from pagequote.core.logging import setup_logging
from pagequote.core.settings import get_settings


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    yield
    shutdown_worker()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS: the quote UI uploads straight from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(analysis_router)
app.include_router(quotes_router)
