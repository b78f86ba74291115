# tabs_vs_spaces/api/routers/health.py

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from tabs_vs_spaces.api.dependencies import get_correlation_id, get_database
from tabs_vs_spaces.application.exceptions import StorageError
from tabs_vs_spaces.infrastructure.database.pool import Database

router = APIRouter()


@router.get("/health")
async def health(
    request: Request,
    database: Annotated[Database, Depends(get_database)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
):
    """Health check: round-trips SELECT 1 through the pool; 503 when the database is unreachable."""
    settings = request.app.state.settings
    body = {
        "status": "ok",
        "database": "ok",
        "correlation_id": correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }
    try:
        await database.ping()
    except StorageError:
        body.update(status="degraded", database="error")
        return JSONResponse(status_code=503, content=body)
    return body
