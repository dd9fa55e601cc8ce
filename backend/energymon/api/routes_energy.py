from __future__ import annotations

from fastapi import APIRouter, Request

from energymon.api.request_body import read_json_object
from energymon.deps import get_reading_store
from energymon.models.domain import AckResponse
from energymon.services.ingest import log_sample, normalize_sample

router = APIRouter()


@router.post("/energy", response_model=AckResponse)
async def ingest_energy(request: Request) -> AckResponse:
    """
    Sensor node upload. Body fields: t (epoch ms), pA / pB (mW), fan.
    Always acknowledged with 200; malformed fields are coerced, never rejected.
    """
    sample = normalize_sample(await read_json_object(request))
    get_reading_store().replace(sample)
    log_sample(sample)

    return AckResponse(status="OK", message="Data received")
