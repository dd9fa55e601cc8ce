"""
energy.py

Purpose:
  Client-side estimate of consumed energy, integrated from the polled total power.

Model (nominal-interval integration):
  E += P * (interval_ms / 3_600_000)      [mW * h = mWh]

  The configured poll interval is used as dt, not the measured time between polls.
  Missed or late ticks therefore make the estimate drift; this is expected.
  The first successful poll only records its time and adds nothing.

Lifetime:
  In memory only. A new integrator (client restart) starts again from zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MS_PER_HOUR = 3_600_000
UPDATE_INTERVAL_MS = 500


@dataclass
class EnergyAccumulator:
    cumulative_mwh: float = 0.0
    last_sample_time: Optional[float] = None


class EnergyIntegrator:
    def __init__(self, interval_ms: int = UPDATE_INTERVAL_MS):
        self.interval_ms = interval_ms
        self.acc = EnergyAccumulator()

    @property
    def cumulative_mwh(self) -> float:
        return self.acc.cumulative_mwh

    def update(self, total_power_mw: float, now: float) -> float:
        if self.acc.last_sample_time is not None:
            dt_h = self.interval_ms / MS_PER_HOUR
            self.acc.cumulative_mwh += total_power_mw * dt_h
        self.acc.last_sample_time = now
        return self.acc.cumulative_mwh
