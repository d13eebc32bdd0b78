"""
FastAPI application entry point.

Sets up the application with:
- Lifespan management (startup/shutdown)
- Route registration
- Error handling
"""

import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import set_lookup_service
from api.routes import albums_router
from core.config import ConfigError, load_database_config, settings
from core.logging import configure_logging, get_logger
from core.storage import create_album_repository
from services.album_lookup import AlbumLookupService


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup: load the connection descriptor, open the connection pool
    (pinging the database), build the lookup service.
    Shutdown: release the connection pool.

    Any startup failure propagates and aborts the server.
    """
    logger.info(
        "Starting album service...",
        config_file=settings.config_file,
    )

    database_config = load_database_config(settings.config_file)

    repository = create_album_repository(database_config, settings)
    await repository.setup()

    set_lookup_service(
        AlbumLookupService(
            repository,
            timeout_seconds=settings.query_timeout_seconds,
        )
    )

    logger.info(
        "Album service started",
        host=settings.server_host,
        port=settings.server_port,
        status_mode=settings.status_mode,
    )

    yield

    logger.info("Shutting down album service...")
    set_lookup_service(None)
    await repository.close()
    logger.info("Album service stopped")


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    """
    configure_logging(settings)

    app = FastAPI(
        title="Album Service",
        description="Look up albums by id.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Register routes
    app.include_router(albums_router)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "message": str(exc) if settings.debug else "An error occurred",
            },
        )

    return app


app = create_app()


def main() -> None:
    """Validate the config file, then serve until interrupted."""
    import uvicorn

    try:
        load_database_config(settings.config_file)
    except ConfigError as e:
        logger.error("Failed to load configuration", error=str(e))
        sys.exit(1)

    uvicorn.run(
        "api.server:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
