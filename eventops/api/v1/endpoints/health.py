"""Health check endpoints for liveness and readiness probes."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from eventops.domain.exceptions import SqlNotConfiguredException
from eventops.infrastructure.persistence.database import check_database
from eventops.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unavailable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers SELECT 1; 503 otherwise."""
    try:
        await check_database()
    except SqlNotConfiguredException as e:
        message = e.message
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        message = "Database unreachable"
    else:
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(status="not_ready", message=message).model_dump(),
    )
