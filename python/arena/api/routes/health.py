"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter

from arena.responses import success_response

router = APIRouter()

SERVICE_NAME = "arena-api-mock"


@router.get("/health")
async def health_check() -> dict:
    """Liveness check endpoint.

    Returns 200 if the process is running. State is in memory, so there
    are no downstream dependencies to probe.
    """
    return success_response(
        {
            "status": "ok",
            "service": SERVICE_NAME,
            "timestamp": datetime.now(UTC).isoformat(),
        }
    )
