"""
alerts.py

Purpose:
  Edge-triggered alert notification. One notification (plus a short vibration)
  per activation of `alert.active`, not one per poll.

State machine (per client session):

  IDLE  --active-->   ARMED   fires notify + vibrate once
  ARMED --active-->   ARMED   nothing
  ARMED --inactive--> IDLE    nothing
  IDLE  --inactive--> IDLE    nothing

Capabilities come from a NotificationBackend. A missing capability, a denied
permission, or a backend error never fails the poll: the side effect is skipped.
Permission is only requested at the first IDLE -> ARMED transition.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence

from energymon.models.domain import AlertStatus

log = logging.getLogger(__name__)

ALERT_TITLE = "Energy Alert"
DEFAULT_ALERT_MESSAGE = "Alert"
VIBRATION_PATTERN_MS = (100, 60, 100)


class AlertState(str, Enum):
    IDLE = "IDLE"
    ARMED = "ARMED"


@dataclass
class AlertEdgeState:
    was_active: bool = False


class NotificationBackend(Protocol):
    supports_notifications: bool
    supports_vibration: bool

    async def request_permission(self) -> bool: ...

    def notify(self, title: str, body: str) -> None: ...

    def vibrate(self, pattern: Sequence[int]) -> None: ...


class NullNotificationBackend:
    """No notification or vibration capability (headless client)."""

    supports_notifications = False
    supports_vibration = False

    async def request_permission(self) -> bool:
        return False

    def notify(self, title: str, body: str) -> None:
        return None

    def vibrate(self, pattern: Sequence[int]) -> None:
        return None


class LogNotificationBackend:
    """Delivers notifications as WARNING log records. Permission is always granted."""

    supports_notifications = True
    supports_vibration = False

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or log

    async def request_permission(self) -> bool:
        return True

    def notify(self, title: str, body: str) -> None:
        self.logger.warning("%s: %s", title, body)

    def vibrate(self, pattern: Sequence[int]) -> None:
        return None


class AlertNotifier:
    def __init__(self, backend: Optional[NotificationBackend] = None):
        self.backend = backend or NullNotificationBackend()
        self.edge = AlertEdgeState()
        self._permission: Optional[bool] = None
        self.fired = 0

    @property
    def state(self) -> AlertState:
        return AlertState.ARMED if self.edge.was_active else AlertState.IDLE

    def observe(self, alert: AlertStatus) -> bool:
        """
        Feed one polled alert. Returns True only when this observation
        was an IDLE -> ARMED transition; the caller then runs `deliver()`.
        """
        rising = alert.active and not self.edge.was_active
        self.edge.was_active = bool(alert.active)
        if rising:
            self.fired += 1
        return rising

    async def _ensure_permission(self) -> bool:
        if not getattr(self.backend, "supports_notifications", False):
            return False
        if self._permission is None:
            self._permission = bool(await self.backend.request_permission())
        return self._permission

    async def deliver(self, alert: AlertStatus) -> None:
        message = alert.message or DEFAULT_ALERT_MESSAGE
        try:
            if not await self._ensure_permission():
                log.debug("Alert notification skipped: no permission or capability")
                return
            self.backend.notify(ALERT_TITLE, message)
            if getattr(self.backend, "supports_vibration", False):
                self.backend.vibrate(VIBRATION_PATTERN_MS)
        except Exception as e:
            log.debug("Alert notification failed: %s", e)
