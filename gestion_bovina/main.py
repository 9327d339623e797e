"""Gestión Bovina API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GestionBovinaError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py: the one place kinds become status codes

Run with::

    uvicorn gestion_bovina.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gestion_bovina.api.error_handlers import register_error_handlers
from gestion_bovina.api.routes import animals, auth, health
from gestion_bovina.config import get_settings
from gestion_bovina.infrastructure.database import close_db, init_db
from gestion_bovina.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not settings.access_token_expire_minutes:
        logger.warning("Bearer tokens are issued without expiry")
    logger.info("Gestión Bovina API started")
    yield
    await close_db()
    logger.info("Gestión Bovina API shutting down")


app = FastAPI(
    title="Gestión Bovina API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(animals.router)

register_error_handlers(app)
