"""
reading_store.py

Purpose:
  Holds the single most-recent telemetry sample received from the sensor node.

Contract:
  - `get()` never returns None: before the first ingestion it returns the zero/OFF sample.
  - `replace()` swaps the whole sample under a lock. Samples are frozen models,
    so a reader only ever sees a complete sample from some completed write.
  - No history. Last write wins.
"""
from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

from energymon.models.domain import TelemetrySample

ZERO_SAMPLE = TelemetrySample()


class ReadingStore:
    def __init__(self, initial: TelemetrySample = ZERO_SAMPLE):
        self._lock = threading.Lock()
        self._sample = initial
        self._updated_at: Optional[datetime] = None

    def get(self) -> TelemetrySample:
        with self._lock:
            return self._sample

    def replace(self, sample: TelemetrySample) -> None:
        with self._lock:
            self._sample = sample
            self._updated_at = datetime.now()

    def reset(self) -> None:
        with self._lock:
            self._sample = ZERO_SAMPLE
            self._updated_at = None

    @property
    def updated_at(self) -> Optional[datetime]:
        """Server time of the last replace(), None until the first ingestion."""
        with self._lock:
            return self._updated_at
