import asyncio
import json

from energymon.api.routes_status import status_stream
from energymon.models.domain import TelemetrySample


async def _first_event():
    response = await status_stream(interval_ms=100)
    return await response.body_iterator.__anext__()


def test_stream_pushes_status_snapshot(fresh_store):
    fresh_store.replace(TelemetrySample(power_a_mw=601.0, power_b_mw=5.0, fan_commanded=True))

    event = asyncio.run(_first_event())
    data = json.loads(event["data"])

    assert data["totals"]["total_power"] == 606.0
    assert data["loads"]["fanA"]["state"] == "ON"
    assert data["fan"]["state"] == "ON"
    assert data["alert"]["active"] is False
