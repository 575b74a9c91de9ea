"""Faktur API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FakturError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The DatabaseSessionManager is created in the lifespan, lives on
      app.state.db_manager, and is disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests can build an app without touching module state
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from faktur.api.error_handlers import register_error_handlers
from faktur.api.routes import (
    business_profile, clients, dashboard, health, invoices, payments,
)
from faktur.config import get_settings
from faktur.infrastructure.database import DatabaseSessionManager
from faktur.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Faktur API started")
    try:
        yield
    finally:
        logger.info("Faktur API shutting down")
        await app.state.db_manager.close()


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(title="Faktur API", version="1.0.0", lifespan=lifespan)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health.router)
    application.include_router(clients.router)
    application.include_router(invoices.router)
    application.include_router(payments.router)
    application.include_router(dashboard.router)
    application.include_router(business_profile.router)

    register_error_handlers(application)
    return application


app = create_app()
