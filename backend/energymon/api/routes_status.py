from __future__ import annotations

import asyncio

from fastapi import APIRouter, Query
from sse_starlette.sse import EventSourceResponse

from energymon.deps import get_reading_store, get_thresholds
from energymon.models.domain import DerivedStatus
from energymon.services.status_deriver import derive_status

router = APIRouter()


def current_status() -> DerivedStatus:
    return derive_status(get_reading_store().get(), get_thresholds())


@router.get("/status", response_model=DerivedStatus)
async def status() -> DerivedStatus:
    """
    Dashboard snapshot derived from the latest sample.
    Polled by the client every 500 ms.
    """
    return current_status()


@router.get("/status/stream", response_class=EventSourceResponse)
async def status_stream(
    interval_ms: int = Query(500, ge=100, le=10000, description="Push period (ms)"),
):
    """
    Same snapshot as /status, pushed as SSE events for clients that prefer
    a stream over polling.
    """
    async def event_generator():
        while True:
            yield {"data": current_status().model_dump_json()}
            await asyncio.sleep(interval_ms / 1000.0)

    return EventSourceResponse(event_generator())
