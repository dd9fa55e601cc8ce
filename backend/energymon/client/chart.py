from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List

MAX_POINTS = 120  # ~60s at 500 ms per poll


@dataclass(frozen=True)
class ChartPoint:
    total_power_mw: float
    cumulative_energy_mwh: float


class RollingChart:
    """
    Two-series chart buffer (power on the left axis, energy on the right).
    Keeps the newest `max_points` points; drawing them is the widget's job.
    """

    def __init__(self, max_points: int = MAX_POINTS):
        self.points: Deque[ChartPoint] = deque(maxlen=max_points)

    def push(self, point: ChartPoint) -> None:
        self.points.append(point)

    def power_series(self) -> List[float]:
        return [p.total_power_mw for p in self.points]

    def energy_series(self) -> List[float]:
        return [p.cumulative_energy_mwh for p in self.points]

    def __len__(self) -> int:
        return len(self.points)
