"""Secret Board — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BoardError → generic 400 page / structured response
    - The one-time token registry is created with the app and lives for the process
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Registry on app.state (not a module global): injected through get_token_registry
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from board.api.error_handlers import register_error_handlers
from board.api.routes import health, navigation, posts
from board.config import get_settings
from board.core.one_time_tokens import OneTimeTokenRegistry
from board.infrastructure.database import init_db
from board.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    logger.info("Secret Board started")
    yield
    await manager.dispose()
    logger.info("Secret Board shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Secret Board", version="1.0.0", lifespan=lifespan,
    )
    application.state.token_registry = OneTimeTokenRegistry(
        token_bytes=settings.one_time_token_bytes,
    )

    # Routes — explicit registration
    application.include_router(health.router)
    application.include_router(navigation.router)
    application.include_router(posts.router)

    register_error_handlers(application)
    return application


app = create_app()
