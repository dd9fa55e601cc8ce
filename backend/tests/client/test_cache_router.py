import asyncio
from typing import List

import httpx
import pytest

from energymon.client.api import DashboardApi, StatusFetchError
from energymon.client.cache_router import (
    CACHE_NAME,
    SHELL_ASSETS,
    CacheInstallError,
    CacheRouterNotReady,
    CacheRouterTransport,
    CacheStorage,
    OfflineCacheRouter,
    StoredResponse,
)

BASE_URL = "http://sensor-hub.local:3000"


class FakeNetwork:
    """Serves shell assets and /status until `up` is switched off."""

    def __init__(self):
        self.up = True
        self.missing: List[str] = []
        self.calls: List[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        if not self.up:
            raise httpx.ConnectError("network unreachable", request=request)
        if request.url.path in self.missing:
            return httpx.Response(404, text="not found")
        if request.url.path.startswith("/status"):
            return httpx.Response(200, json={"live": True})
        return httpx.Response(200, text=f"asset {request.url.path}")


def make_router(net: FakeNetwork, storage=None, cache_name=CACHE_NAME) -> OfflineCacheRouter:
    return OfflineCacheRouter(
        network=httpx.MockTransport(net),
        base_url=BASE_URL,
        storage=storage,
        cache_name=cache_name,
    )


def get(router: OfflineCacheRouter, path: str, method: str = "GET") -> httpx.Response:
    async def go():
        res = await router.handle(httpx.Request(method, BASE_URL + path))
        await res.aread()
        return res

    return asyncio.run(go())


def test_install_caches_full_manifest():
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())

    entries = router.storage.open(CACHE_NAME)
    assert len(entries) == len(SHELL_ASSETS)
    assert f"{BASE_URL}/index.html" in entries


def test_install_is_all_or_nothing():
    net = FakeNetwork()
    net.missing = ["/manifest.webmanifest"]
    router = make_router(net)

    with pytest.raises(CacheInstallError):
        asyncio.run(router.install())

    assert router.storage.keys() == []
    assert router.installed is False


def test_install_fails_when_network_down():
    net = FakeNetwork()
    net.up = False
    router = make_router(net)

    with pytest.raises(CacheInstallError):
        asyncio.run(router.install())


def test_serving_before_activation_is_refused():
    router = make_router(FakeNetwork())
    with pytest.raises(CacheRouterNotReady):
        get(router, "/index.html")

    with pytest.raises(CacheRouterNotReady):
        asyncio.run(router.activate())


def test_cached_asset_served_without_network():
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())
    net.calls.clear()
    net.up = False

    res = get(router, "/index.html")

    assert res.status_code == 200
    assert res.text == "asset /index.html"
    assert net.calls == []


def test_uncached_asset_falls_through_to_network():
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())
    net.calls.clear()

    res = get(router, "/js/extra.js")
    assert res.text == "asset /js/extra.js"
    assert net.calls == ["/js/extra.js"]


def test_uncached_asset_has_no_offline_stub():
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())
    net.up = False

    with pytest.raises(httpx.ConnectError):
        get(router, "/js/extra.js")


@pytest.mark.parametrize("path", ["/status", "/control", "/alerts/recent"])
def test_dynamic_paths_fall_back_to_offline_stub(path):
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())
    net.up = False

    res = get(router, path, method="POST" if path == "/control" else "GET")

    assert res.status_code == 200
    assert res.json() == {"offline": True}


def test_dynamic_paths_prefer_network_even_if_cached():
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())
    router.storage.open(CACHE_NAME)[f"{BASE_URL}/status"] = StoredResponse(200, [], b'{"stale": true}')

    res = get(router, "/status")
    assert res.json() == {"live": True}


def test_activate_purges_other_generations_only():
    storage = CacheStorage()
    storage.open("energy-ui-v0")["http://old/"] = StoredResponse(200, [], b"old")
    storage.open("something-else")["http://x/"] = StoredResponse(200, [], b"x")

    net = FakeNetwork()
    router = make_router(net, storage=storage, cache_name="energy-ui-v1")
    asyncio.run(router.start())

    assert storage.keys() == ["energy-ui-v1"]
    assert len(storage.open("energy-ui-v1")) == len(SHELL_ASSETS)
    assert storage.match("http://old/") is None


def test_poller_client_behind_router_sees_offline_as_failure():
    net = FakeNetwork()
    router = make_router(net)
    asyncio.run(router.start())
    net.up = False

    async def go():
        async with httpx.AsyncClient(base_url=BASE_URL, transport=CacheRouterTransport(router)) as client:
            await DashboardApi(client).fetch_status()

    with pytest.raises(StatusFetchError):
        asyncio.run(go())
