"""Health check API routes."""

from datetime import datetime, timezone

from fastapi import APIRouter
from ...schemas.link import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status and current UTC time.
    """
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
