from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from energymon.api.request_body import read_json_object
from energymon.models.domain import AckResponse

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/control", response_model=AckResponse)
async def control(request: Request) -> AckResponse:
    # Accepted and logged only; the firmware owns its thresholds for now.
    body = await read_json_object(request)
    log.info("Control command received: %s", body)
    return AckResponse(status="OK", message="Command received")
