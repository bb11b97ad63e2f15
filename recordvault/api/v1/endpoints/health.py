"""Health check endpoints: liveness without dependencies, readiness with a database round trip."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from recordvault.api.v1.dependencies import get_uow_factory
from recordvault.application.interfaces import UnitOfWorkFactory
from recordvault.core.config import get_settings
from recordvault.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not reachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers a query; 503 otherwise."""
    try:
        async with uow_factory() as uow:
            await uow.records.list(limit=1)
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="database unavailable").model_dump(),
        )
    return ReadinessResponse()
