"""
Health check endpoint

GET /health - liveness only, no dependency checks
"""
from fastapi import APIRouter, status

from jira_assistant.models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def basic_health_check() -> HealthResponse:
    """Always returns {"status": "ok"}"""
    return HealthResponse(status="ok")
