"""
Headless dashboard client.

  python -m energymon.client        (DASHBOARD_URL, POLL_INTERVAL_MS)

Builds the whole client stack (offline cache router -> httpx client -> poller
with energy integrator, alert notifier, chart and view) and polls forever.
"""
from __future__ import annotations

import asyncio
import logging

import httpx

from energymon.client.alerts import AlertNotifier, LogNotificationBackend
from energymon.client.api import DashboardApi
from energymon.client.cache_router import (
    CacheInstallError,
    CacheRouterTransport,
    OfflineCacheRouter,
)
from energymon.client.chart import RollingChart
from energymon.client.energy import UPDATE_INTERVAL_MS, EnergyIntegrator
from energymon.client.poller import Poller
from energymon.client.view import DashboardView
from energymon.config import env_int, env_str
from energymon.logging_setup import configure_logging

log = logging.getLogger("energymon.client")


async def run_client(base_url: str, interval_ms: int) -> None:
    router = OfflineCacheRouter(network=httpx.AsyncHTTPTransport(), base_url=base_url)
    try:
        await router.start()
        transport: httpx.AsyncBaseTransport = CacheRouterTransport(router)
    except CacheInstallError as e:
        # Same as a service worker that failed to install: the page still works online
        log.warning("Offline cache not installed: %s", e)
        await router.aclose()
        transport = httpx.AsyncHTTPTransport()

    view = DashboardView()
    async with httpx.AsyncClient(
        base_url=base_url,
        transport=transport,
        timeout=5.0,
    ) as client:
        poller = Poller(
            api=DashboardApi(client, view=view),
            integrator=EnergyIntegrator(interval_ms=interval_ms),
            notifier=AlertNotifier(LogNotificationBackend()),
            chart=RollingChart(),
            view=view,
            interval_ms=interval_ms,
        )
        await poller.run()


def main() -> None:
    configure_logging()
    base_url = env_str("DASHBOARD_URL", "http://localhost:3000")
    interval_ms = env_int("POLL_INTERVAL_MS", UPDATE_INTERVAL_MS)
    log.info("Polling %s/status every %d ms", base_url, interval_ms)
    asyncio.run(run_client(base_url, interval_ms))


if __name__ == "__main__":
    main()
