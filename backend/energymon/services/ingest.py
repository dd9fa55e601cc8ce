"""
ingest.py

Purpose:
  Turns whatever the sensor node POSTs into a TelemetrySample.
  Nothing is ever rejected: bad or missing fields collapse to defaults.

Truth table (wire field -> sample field):

  | wire | raw value                          | normalized            |
  |------|------------------------------------|-----------------------|
  | t    | missing / falsy / non-numeric      | 0                     |
  | t    | non-finite or above MAX_READING    | 0                     |
  | t    | number or numeric string           | int(value)            |
  | pA   | missing / falsy / non-numeric      | 0                     |
  | pA   | number                             | value (int kept)      |
  | pA   | numeric string                     | float(value)          |
  | pA   | non-finite or above MAX_READING    | 0                     |
  | pB   | (same as pA)                       |                       |
  | fan  | True, 1, "true", "1"               | True                  |
  | fan  | anything else, including missing   | False                 |

  A legit 0 mW reading and a missing field are indistinguishable on purpose.
"""
from __future__ import annotations

import logging
import math
import sys
from typing import Any, Dict

from energymon.models.domain import Number, TelemetrySample

log = logging.getLogger(__name__)

_FAN_TRUE_STRINGS = {"true", "1"}

MAX_READING = sys.float_info.max / 2


def _number_or_zero(raw: Any) -> Number:
    # bool is an int subclass; True would otherwise read as 1 mW
    if not raw or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return 0
    else:
        return 0
    try:
        magnitude = abs(float(value))
    except OverflowError:
        # int too large for a float
        return 0
    # keeps pA + pB finite
    if math.isnan(magnitude) or magnitude > MAX_READING:
        return 0
    return value


def _fan_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw == 1
    if isinstance(raw, str):
        return raw in _FAN_TRUE_STRINGS
    return False


def normalize_sample(raw: Any) -> TelemetrySample:
    body: Dict[str, Any] = raw if isinstance(raw, dict) else {}

    return TelemetrySample(
        timestamp=int(_number_or_zero(body.get("t"))),
        power_a_mw=_number_or_zero(body.get("pA")),
        power_b_mw=_number_or_zero(body.get("pB")),
        fan_commanded=_fan_flag(body.get("fan")),
    )


def log_sample(sample: TelemetrySample) -> None:
    log.info(
        "Received: pA=%g mW, pB=%g mW, fan=%s",
        sample.power_a_mw,
        sample.power_b_mw,
        "ON" if sample.fan_commanded else "OFF",
    )
