"""
view.py

Purpose:
  Display state of the dashboard page (what each element shows), kept separate
  from any markup. The poller renders a DerivedStatus into it on every good tick.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from energymon.models.domain import DerivedStatus


@dataclass
class DashboardView:
    online: bool = False

    total_power: str = "0 mW"
    energy_today: str = "0.000"

    fan_a_power: str = "0 mW"
    fan_a_state: str = "OFF"
    fan_b_power: str = "0 mW"
    fan_b_state: str = "OFF"
    fan_control_state: str = "OFF"

    alert_text: str = ""
    alert_hidden: bool = True

    last_toast: Optional[str] = None

    def set_online(self, ok: bool) -> None:
        self.online = ok

    def toast(self, msg: str) -> None:
        self.last_toast = msg

    def render(self, status: DerivedStatus) -> None:
        self.total_power = f"{round(status.totals.total_power)} mW"
        self.energy_today = f"{status.totals.energy_today_kWh:.3f}"

        self.fan_a_power = f"{round(status.loads.fanA.power)} mW"
        self.fan_a_state = status.loads.fanA.state.value
        self.fan_b_power = f"{round(status.loads.fanB.power)} mW"
        self.fan_b_state = status.loads.fanB.state.value
        self.fan_control_state = status.fan.state.value

        if status.alert.active:
            self.alert_text = status.alert.message or "Alert"
            self.alert_hidden = False
        else:
            self.alert_hidden = True
