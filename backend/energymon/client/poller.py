"""
poller.py

Purpose:
  The dashboard refresh loop. Fetches /status on a fixed period and drives every
  downstream consumer from the result.

Per tick:
  1. GET /status (no-store).
  2. Success -> mark online, then in order:
       Energy Integrator -> Alert Notifier -> chart sink -> DOM sink
  3. Failure (transport, non-2xx, bad body) -> mark offline, touch nothing else.

Scheduling:
  - One tick right away, then one every `interval_ms`. No backoff, no jitter,
    no retry inside a tick.
  - Each tick runs as its own task and is never cancelled. A tick that outlives
    the period can overlap the next one; whichever finishes last wins the sinks.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional, Set

from energymon.client.alerts import AlertNotifier
from energymon.client.api import DashboardApi, StatusFetchError
from energymon.client.chart import ChartPoint, RollingChart
from energymon.client.energy import UPDATE_INTERVAL_MS, EnergyIntegrator
from energymon.client.view import DashboardView
from energymon.models.domain import DerivedStatus

log = logging.getLogger(__name__)


class Poller:
    def __init__(
        self,
        api: DashboardApi,
        integrator: EnergyIntegrator,
        notifier: AlertNotifier,
        chart: RollingChart,
        view: DashboardView,
        interval_ms: int = UPDATE_INTERVAL_MS,
        clock: Callable[[], float] = time.time,
    ):
        self.api = api
        self.integrator = integrator
        self.notifier = notifier
        self.chart = chart
        self.view = view
        self.interval_ms = interval_ms
        self.clock = clock

        self.ticks_ok = 0
        self.ticks_failed = 0
        self._running = False
        self._tasks: Set[asyncio.Task] = set()

    async def tick(self) -> Optional[DerivedStatus]:
        try:
            status = await self.api.fetch_status()
        except StatusFetchError as e:
            if self.view.online:
                log.warning("Lost connection to server: %s", e)
            return self._fail()
        except Exception:
            # e.g. CacheRouterNotReady from the transport; still just an offline tick
            log.exception("Status poll failed")
            return self._fail()

        if not self.view.online:
            log.info("Connected to server")
        self.view.set_online(True)
        self._apply(status)
        self.ticks_ok += 1
        return status

    def _fail(self) -> None:
        self.view.set_online(False)
        self.ticks_failed += 1
        return None

    def _apply(self, status: DerivedStatus) -> None:
        power = status.totals.total_power
        energy = self.integrator.update(power, self.clock())
        if self.notifier.observe(status.alert):
            self._schedule(self.notifier.deliver(status.alert))
        self.chart.push(ChartPoint(total_power_mw=power, cumulative_energy_mwh=energy))
        self.view.render(status)

    def _schedule(self, coro) -> None:
        # Notification delivery may wait on a permission prompt; the tick does not.
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("Poller task failed", exc_info=task.exception())

    async def run(self) -> None:
        self._running = True
        period_s = self.interval_ms / 1000.0
        while self._running:
            self._schedule(self.tick())
            await asyncio.sleep(period_s)

    def stop(self) -> None:
        """Stops scheduling new ticks. Ticks already in flight finish on their own."""
        self._running = False

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
