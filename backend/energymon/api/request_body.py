from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import Request


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Returns the request body as a dict. Invalid JSON or a non-object body
    yields {} instead of a 4xx: the sensor is never told its payload was bad.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
