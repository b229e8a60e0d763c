"""
Health check and status router.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .. import __version__
from ..database import check_connection, get_db

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str = "horizon-api"
    database: str


class StatusResponse(BaseModel):
    message: str
    version: str
    timestamp: str


@router.get("/health", response_model=HealthResponse, summary="Health check")
def health_check(db: Session = Depends(get_db)):
    """
    Liveness plus database connectivity.

    Reports "degraded" instead of failing when the database is unreachable.
    """
    db_healthy = check_connection(db)
    return HealthResponse(
        status="healthy" if db_healthy else "degraded",
        database="connected" if db_healthy else "disconnected",
    )


@router.get("/api/v1/status", response_model=StatusResponse, summary="API status")
async def api_status():
    return StatusResponse(
        message="Horizon API is running",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
