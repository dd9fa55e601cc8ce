from __future__ import annotations

from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# ints stay ints on the wire (700, not 700.0)
Number = Union[int, float]


# ============================================================
# 0) ENUMS (Type Safety)
# ============================================================

class LoadState(str, Enum):
    ON = "ON"
    OFF = "OFF"

    @classmethod
    def of(cls, on: bool) -> "LoadState":
        return cls.ON if on else cls.OFF


# ============================================================
# 1) SENSOR INPUT + STATIC CONFIG
# ============================================================

class TelemetrySample(BaseModel):
    """
    One reading from the sensor node, already normalized.
    Immutable: the reading store swaps whole samples, never fields.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: int = 0          # epoch ms, sensor clock (may be stale or 0)
    power_a_mw: Number = 0
    power_b_mw: Number = 0
    fan_commanded: bool = False


class ThresholdConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Matches the firmware's per-fan switching threshold (mW)
    per_load_limit_mw: Number = 600
    total_limit_mw: Number = 1200


# ============================================================
# 2) DERIVED STATUS (GET /status contract)
# ============================================================

class Totals(BaseModel):
    total_power: Number         # mW
    energy_today_kWh: Number = 0


class LoadStatus(BaseModel):
    power: Number               # mW
    state: LoadState


class Loads(BaseModel):
    fanA: LoadStatus
    fanB: LoadStatus


class FanControl(BaseModel):
    state: LoadState


class AlertStatus(BaseModel):
    active: bool = False
    message: Optional[str] = None


class Thresholds(BaseModel):
    fan_power_limit: Number     # mW
    total_power_limit: Number   # mW


class DerivedStatus(BaseModel):
    totals: Totals
    loads: Loads
    fan: FanControl
    alert: AlertStatus = Field(default_factory=AlertStatus)
    auto_control_enabled: bool = False
    thresholds: Thresholds


# ============================================================
# 3) API RESPONSE SCHEMAS
# ============================================================

class AckResponse(BaseModel):
    status: str = "OK"
    message: str


class HealthResponse(BaseModel):
    status: str
    ts: str
    last_sample_at: Optional[str] = None
