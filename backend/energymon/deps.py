"""
deps.py

Purpose:
  Process-wide singletons shared across requests.

Services Managed:
  - `ReadingStore` (latest sensor sample)
  - `ThresholdConfig` (static per-load / total limits)

Pattern:
  - `lru_cache(maxsize=1)` keeps one instance per process.
  - Tests reset state with `get_reading_store().reset()` or patch the getter.
"""
from __future__ import annotations

from functools import lru_cache

from energymon.models.domain import ThresholdConfig
from energymon.services.reading_store import ReadingStore


@lru_cache(maxsize=1)
def get_reading_store() -> ReadingStore:
    return ReadingStore()


@lru_cache(maxsize=1)
def get_thresholds() -> ThresholdConfig:
    return ThresholdConfig()
