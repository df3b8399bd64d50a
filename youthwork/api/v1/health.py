"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from youthwork.api.deps import Tables

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


class ReadinessResponse(HealthResponse):
    """Readiness response with the loaded ruleset."""

    ruleset_id: str
    ruleset_version: str
    ruleset_hash: str


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns service health status",
)
async def health_check() -> HealthResponse:
    """Check if the service is healthy.

    Returns:
        Health status response
    """
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns readiness and the loaded ruleset for k8s readiness checks",
)
async def readiness_check(tables: Tables) -> ReadinessResponse:
    """Check if the service is ready to accept requests.

    Ready means the rule tables are loaded and parsed.

    Returns:
        Readiness status with ruleset version and hash
    """
    return ReadinessResponse(
        status="ok",
        ruleset_id=tables.id,
        ruleset_version=tables.version,
        ruleset_hash=tables.content_hash,
    )
