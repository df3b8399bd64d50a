"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from youthwork.api.v1 import compliance, eligibility, health

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Job compliance
api_router.include_router(
    compliance.router,
    prefix="/compliance",
    tags=["compliance"],
)

# Age eligibility
api_router.include_router(
    eligibility.router,
    prefix="/eligibility",
    tags=["eligibility"],
)
