"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    setup_exception_handlers,
)
from src.api.routes import (
    analytics_router,
    auth_router,
    health_router,
    inventory_router,
    stock_history_router,
    suppliers_router,
)
from src.api.routes.health import build_health
from src.application.dto.responses import HealthResponse
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate the schema and open the pool before serving; close it after."""
    from src.infrastructure.storage.sqlite import close_pool, get_pool
    from src.infrastructure.storage.sqlite.migrations import run_migrations

    settings = get_settings()
    logger.info(
        "application_starting",
        environment=settings.environment,
        db_path=str(settings.storage.db_path),
    )

    try:
        results = await run_migrations(create_backup_before=settings.storage.backup_before_migrate)
        failed = [r.version for r in results if not r.success]
        if failed:
            raise RuntimeError(f"Migrations failed: {', '.join(failed)}")
        await get_pool()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started", migrations_applied=len(results))
    try:
        yield
    finally:
        await close_pool()
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
        title=settings.app_name,
        description="Inventory items, suppliers, stock history audit trail and analytics",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS; credentials are required for the session cookie
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
    app.include_router(auth_router)
    app.include_router(inventory_router)
    app.include_router(suppliers_router)
    app.include_router(stock_history_router)
    app.include_router(analytics_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def root_health() -> HealthResponse:
        return await build_health()

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
