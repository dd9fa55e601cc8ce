from __future__ import annotations

from datetime import datetime
from fastapi import APIRouter

from energymon.deps import get_reading_store
from energymon.models.domain import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness plus the server time of the last sensor upload (None if never)."""
    updated_at = get_reading_store().updated_at
    return HealthResponse(
        status="ok",
        ts=datetime.now().isoformat(),
        last_sample_at=updated_at.isoformat() if updated_at else None,
    )
