"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bloghub.api.dependencies.database import DatabaseDep
from bloghub.config.settings import settings
from bloghub.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Does not touch the database; use /ready for that.
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/live")
async def liveness_check():
    """Liveness check: the process is up and serving requests."""
    return {"status": "alive"}


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def readiness_check(database: DatabaseDep):
    """
    Readiness check for load balancers.

    Runs SELECT 1 against the datastore. 503 while it is unreachable.
    """
    if await database.ping():
        return HealthResponse(
            status="ready",
            service=settings.APP_NAME.lower(),
            version=settings.APP_VERSION,
            checks={"database": "ok"},
        )

    body = HealthResponse(
        status="unavailable",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
        checks={"database": "unreachable"},
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )
