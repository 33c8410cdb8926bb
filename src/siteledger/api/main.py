"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from siteledger import __version__
from siteledger.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from siteledger.api.middleware.error_handler import setup_exception_handlers
from siteledger.api.routes import (
    health_router,
    inventory_router,
    project_inventory_router,
    projects_router,
    warehouse_router,
)
from siteledger.config import Settings, configure_logging, get_logger, get_settings
from siteledger.infrastructure.notifications import create_notifier
from siteledger.infrastructure.storage.sqlite import ConnectionPool
from siteledger.infrastructure.storage.sqlite.migrations import run_migrations

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database, opens the connection pool and builds the
    notifier; all three live on `app.state` until shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
    )

    try:
        await run_migrations(settings.storage.db_path)
        pool = ConnectionPool.from_settings(settings)
        await pool.initialize()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    app.state.pool = pool
    app.state.notifier = create_notifier(settings)
    logger.info("application_started")

    try:
        yield
    finally:
        logger.info("application_stopping")
        await app.state.notifier.close()
        await pool.close()
        logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    configure_logging()

    app = FastAPI(
        title="SiteLedger API",
        description="Project inventory ledger for construction sites",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

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

    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(warehouse_router)
    app.include_router(projects_router)
    app.include_router(project_inventory_router)
    app.include_router(inventory_router)

    # Root health endpoint (for container health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {"status": "healthy", "version": __version__}

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "siteledger.api.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    main()
