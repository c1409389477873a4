"""
NutriDesk FastAPI Application
Main entry point: application factory, middleware and lifespan management
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import clients, plans, subscriptions, follow_ups, diet_plans, dashboard, health
from api.middleware import RequestLoggingMiddleware, EXCEPTION_HANDLERS
from app.config import settings
from domain.models import Database, create_database

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("nutridesk.main")


async def _init_with_retries(database: Database) -> None:
    """Create the schema, retrying while the database comes up."""
    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(database.init_schema)
            _logger.info("Database initialization succeeded")
            return
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        database: store to serve from; when omitted one is created from
            settings at startup and disposed at shutdown
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")
        owned = database is None
        db = create_database() if owned else database
        app.state.database = db
        await _init_with_retries(db)
        try:
            yield
        finally:
            _logger.info(f"Shutting down {settings.app_name}")
            if owned:
                db.dispose()
                _logger.info("Database connections closed")

    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=(
            f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
        ),
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
        redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
    )
    if database is not None:
        app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)

    for module in (clients, plans, subscriptions, follow_ups, diet_plans, dashboard, health):
        app.include_router(module.router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
