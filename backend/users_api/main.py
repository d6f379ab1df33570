"""Users API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → plain-text responses
    - Database initialized on startup via lifespan context manager, disposed on shutdown
    - An unreachable database at boot does not stop startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests and the CLI build the same application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from users_api.api.error_handlers import register_error_handlers
from users_api.api.routes import health, users
from users_api.config import get_settings
from users_api.infrastructure.database import init_db
from users_api.infrastructure.observability import setup_logging

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
        null_pool=settings.database_null_pool,
    )
    if settings.database_create_tables:
        try:
            await manager.create_tables()
        except (SQLAlchemyError, OSError) as e:
            # Requests report the outage per call; /healthz keeps answering
            logger.error(f"Table bootstrap failed, continuing without it: {e}")
    logger.info("Users API started")
    yield
    await manager.dispose()
    logger.info("Users API shutting down")


def create_app() -> FastAPI:
    app = FastAPI(title="Users API", version="1.0.0", lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(users.router)
    register_error_handlers(app)
    return app


app = create_app()
