"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aurora import __version__
from aurora.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from aurora.api.middleware.error_handler import setup_exception_handlers
from aurora.api.routes import (
    clients_router,
    contractors_router,
    dashboard_router,
    health_router,
    notifications_router,
    orders_router,
    products_router,
    raw_materials_router,
    tasks_router,
    thread_inventory_router,
    workers_router,
)
from aurora.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Applies migrations and opens the connection pool on startup, closes the
    pool on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from aurora.infrastructure.storage.sqlite import get_pool
        from aurora.infrastructure.storage.sqlite.migrations.migrator import run_migrations

        await run_migrations()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from aurora.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Aurora Production Ledger API",
        description="Thread inventory, orders and production tasks for the textile dashboard",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(raw_materials_router)
    app.include_router(thread_inventory_router)
    app.include_router(clients_router)
    app.include_router(products_router)
    app.include_router(contractors_router)
    app.include_router(workers_router)
    app.include_router(orders_router)
    app.include_router(tasks_router)
    app.include_router(notifications_router)
    app.include_router(dashboard_router)

    return app


# Create app instance
app = create_app()


# Root health endpoint (for k8s/docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "aurora.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
