from fastapi import APIRouter, Depends, Response, status

from graphql_i18n.api.dependencies import get_i18n
from graphql_i18n.api.schemas import HealthResponse, ReadinessResponse
from graphql_i18n.core.i18n import I18n

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    i18n: I18n = Depends(get_i18n),
) -> ReadinessResponse:
    """Readiness probe: checks store connectivity."""
    if await i18n.store.ping():
        return ReadinessResponse(status="ok", store="up")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", store="down")
