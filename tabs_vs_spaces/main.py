# tabs_vs_spaces/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from tabs_vs_spaces.api.middleware import AccessLogMiddleware, CorrelationIdMiddleware
from tabs_vs_spaces.api.routers import health, votes
from tabs_vs_spaces.application.exceptions import ApplicationError, StorageError
from tabs_vs_spaces.config.logging import configure_logging
from tabs_vs_spaces.config.settings import AppSettings, get_settings
from tabs_vs_spaces.domain.exceptions import DomainError
from tabs_vs_spaces.infrastructure.database.pool import Database

logger = logging.getLogger(__name__)

STORAGE_ERROR_MESSAGE = "Unable to reach the vote database. Please check the application logs for more details."


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup is strictly sequential: pool, then schema. Any failure aborts before the listener binds.
        database = Database.from_settings(settings)
        try:
            await database.ensure_schema()
        except StorageError:
            await database.dispose()
            raise
        app.state.database = database
        logger.info("startup_complete")
        try:
            yield
        finally:
            await database.dispose()
            logger.info("database_pool_closed")

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AccessLog.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("storage_error", extra={"error": exc.message})
        return PlainTextResponse(STORAGE_ERROR_MESSAGE, status_code=500)

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        logger.error("application_error", extra={"error": exc.message})
        return PlainTextResponse("Internal server error", status_code=500)

    # Routers: /health, / (page + vote submission)
    app.include_router(health.router)
    app.include_router(votes.router)
    return app


app = create_app()
