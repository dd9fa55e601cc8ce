# main.py
from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from energymon.api import routes_control, routes_energy, routes_health, routes_status
from energymon.config import allowed_origins, web_dir
from energymon.logging_setup import configure_logging

configure_logging()
log = logging.getLogger(__name__)


# ============================================================
# 1) FASTAPI APP SETUP
# ============================================================

app = FastAPI(
    title="Smart Energy Monitor",
    version="0.1.0",
    description="Receives power telemetry from the sensor node and serves derived status to the dashboard.",
)

# CORS: the dashboard may be opened from another origin during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# ============================================================
# 2) ROUTES
# ============================================================

app.include_router(routes_health.router)
app.include_router(routes_energy.router, prefix="/api")
app.include_router(routes_status.router)
app.include_router(routes_control.router)

# Dashboard shell last, so API paths are never shadowed by files
_web = web_dir()
if _web.is_dir():
    app.mount("/", StaticFiles(directory=str(_web), html=True), name="web")
else:
    log.warning("Web directory %s not found; dashboard shell will not be served", _web)


# ============================================================
# 3) LOCAL RUN INSTRUCTIONS
# ============================================================
# Run:
#   python -m energymon            (PORT, default 3000)
#   uvicorn energymon.main:app --reload --port 3000
#
# Sensor upload:
#   curl -X POST localhost:3000/api/energy -H 'Content-Type: application/json' \
#        -d '{"t": 1700000000000, "pA": 700, "pB": 0, "fan": "1"}'
#
# Dashboard poll:
#   http://localhost:3000/status
