"""
status_deriver.py

Purpose:
  Builds the dashboard snapshot (`DerivedStatus`) from the latest sample and the
  static thresholds. Pure: same inputs, same output, no state kept between calls.

Rules:
  - total_power = pA + pB
  - fanX.state  = ON iff pX > per_load_limit (strictly greater; equal is OFF)
  - fan.state   = the sensor's own fan command. It comes from the firmware's combined
                  decision and can disagree with the per-load states.
  - alert       = never active; the activation rule is not defined yet.
  - energy_today_kWh = 0; energy is integrated on the dashboard client.
"""
from __future__ import annotations

from energymon.models.domain import (
    AlertStatus,
    DerivedStatus,
    FanControl,
    LoadState,
    LoadStatus,
    Loads,
    TelemetrySample,
    ThresholdConfig,
    Thresholds,
    Totals,
)

DEFAULT_THRESHOLDS = ThresholdConfig()


def load_state(power_mw: float, cfg: ThresholdConfig) -> LoadState:
    return LoadState.of(power_mw > cfg.per_load_limit_mw)


def derive_alert(sample: TelemetrySample, cfg: ThresholdConfig) -> AlertStatus:
    # Placeholder: totals and limits are reported, but no activation rule is evaluated.
    return AlertStatus(active=False, message=None)


def derive_status(sample: TelemetrySample, cfg: ThresholdConfig = DEFAULT_THRESHOLDS) -> DerivedStatus:
    return DerivedStatus(
        totals=Totals(
            total_power=sample.power_a_mw + sample.power_b_mw,
            energy_today_kWh=0,
        ),
        loads=Loads(
            fanA=LoadStatus(power=sample.power_a_mw, state=load_state(sample.power_a_mw, cfg)),
            fanB=LoadStatus(power=sample.power_b_mw, state=load_state(sample.power_b_mw, cfg)),
        ),
        fan=FanControl(state=LoadState.of(sample.fan_commanded)),
        alert=derive_alert(sample, cfg),
        auto_control_enabled=False,
        thresholds=Thresholds(
            fan_power_limit=cfg.per_load_limit_mw,
            total_power_limit=cfg.total_limit_mw,
        ),
    )
