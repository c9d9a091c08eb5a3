from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from datetime import datetime
import logging

from ..database import check_database_health
from ..utils.clock import utcnow
from ..utils.redis_client import redis_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: datetime
    dependencies: dict


def _describe(healthy) -> str:
    if healthy is None:
        return "disabled"
    return "connected" if healthy else "disconnected"


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check(response: Response):
    """Health check for the store and the event bus"""
    db_healthy = await check_database_health()
    redis_healthy = await redis_client.health_check()

    # Redis is optional; only a configured but unreachable Redis counts
    overall_healthy = db_healthy and redis_healthy is not False
    if not overall_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if overall_healthy else "unhealthy",
        service="rideshift",
        timestamp=utcnow(),
        dependencies={
            "database": _describe(db_healthy),
            "redis": _describe(redis_healthy),
        },
    )
