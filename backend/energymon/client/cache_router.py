"""
cache_router.py

Purpose:
  Keeps the dashboard usable when the server is unreachable. Every request the
  client makes goes through `OfflineCacheRouter.handle()`, which picks a policy
  by path:

  | path prefix                        | policy                                            |
  |------------------------------------|---------------------------------------------------|
  | /status, /control, /alerts         | network-first; on network failure answer          |
  |                                    | 200 {"offline": true} instead of raising          |
  | anything else (shell assets)       | cache-first; on miss go to the network            |

Cache generations:
  - `install()`  fetches the whole shell manifest and stores it under the current
                 generation name. All or nothing.
  - `activate()` deletes every other generation. Entries are never invalidated
                 one by one.
  - Requests are only served after both have completed.

`CacheRouterTransport` plugs the router into an `httpx.AsyncClient`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import httpx

log = logging.getLogger(__name__)

CACHE_NAME = "energy-ui-v1"

SHELL_ASSETS: Tuple[str, ...] = (
    "/",
    "/index.html",
    "/manifest.webmanifest",
)

NETWORK_FIRST_PREFIXES: Tuple[str, ...] = ("/status", "/control", "/alerts")

OFFLINE_BODY = {"offline": True}

# Stored bodies are already decoded; these would no longer describe them
_DROP_HEADERS = {"content-encoding", "content-length", "transfer-encoding"}


class CacheInstallError(Exception):
    pass


class CacheRouterNotReady(RuntimeError):
    pass


# ============================================================
# 1) CACHE STORAGE (named generations)
# ============================================================

@dataclass(frozen=True)
class StoredResponse:
    status_code: int
    headers: List[Tuple[str, str]]
    content: bytes

    def to_response(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            self.status_code,
            headers=self.headers,
            content=self.content,
            request=request,
        )


class CacheStorage:
    def __init__(self):
        self._generations: Dict[str, Dict[str, StoredResponse]] = {}

    def open(self, name: str) -> Dict[str, StoredResponse]:
        return self._generations.setdefault(name, {})

    def keys(self) -> List[str]:
        return list(self._generations)

    def delete(self, name: str) -> bool:
        return self._generations.pop(name, None) is not None

    def match(self, url: str) -> Optional[StoredResponse]:
        for entries in self._generations.values():
            if url in entries:
                return entries[url]
        return None


# ============================================================
# 2) ROUTER
# ============================================================

def _stored_headers(res: httpx.Response) -> List[Tuple[str, str]]:
    return [(k, v) for k, v in res.headers.multi_items() if k.lower() not in _DROP_HEADERS]


def is_network_first(path: str) -> bool:
    return path.startswith(NETWORK_FIRST_PREFIXES)


def offline_response(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=OFFLINE_BODY, request=request)


class OfflineCacheRouter:
    def __init__(
        self,
        network: httpx.AsyncBaseTransport,
        base_url: str,
        storage: Optional[CacheStorage] = None,
        cache_name: str = CACHE_NAME,
        manifest: Sequence[str] = SHELL_ASSETS,
    ):
        self.network = network
        self.base_url = httpx.URL(base_url)
        self.storage = storage if storage is not None else CacheStorage()
        self.cache_name = cache_name
        self.manifest = list(manifest)
        self.installed = False
        self.activated = False

    def _url(self, path: str) -> str:
        return str(self.base_url.join(path))

    async def _fetch(self, request: httpx.Request) -> httpx.Response:
        return await self.network.handle_async_request(request)

    async def install(self) -> None:
        fetched: Dict[str, StoredResponse] = {}
        for path in self.manifest:
            url = self._url(path)
            try:
                res = await self._fetch(httpx.Request("GET", url))
                content = await res.aread()
            except httpx.HTTPError as e:
                raise CacheInstallError(f"Failed to fetch {url}: {e}") from e
            if not 200 <= res.status_code < 300:
                raise CacheInstallError(f"Failed to fetch {url}: HTTP {res.status_code}")
            fetched[url] = StoredResponse(res.status_code, _stored_headers(res), content)

        self.storage.open(self.cache_name).update(fetched)
        self.installed = True
        log.info("Cached %d shell assets in %s", len(fetched), self.cache_name)

    async def activate(self) -> None:
        if not self.installed:
            raise CacheRouterNotReady("activate() called before install()")
        for name in self.storage.keys():
            if name != self.cache_name:
                self.storage.delete(name)
                log.info("Deleted stale cache generation %s", name)
        self.activated = True

    async def start(self) -> None:
        await self.install()
        await self.activate()

    async def handle(self, request: httpx.Request) -> httpx.Response:
        if not self.activated:
            raise CacheRouterNotReady("cache router used before install/activate finished")

        if is_network_first(request.url.path):
            try:
                return await self._fetch(request)
            except httpx.TransportError as e:
                log.debug("Network unavailable for %s: %s", request.url.path, e)
                return offline_response(request)

        if request.method == "GET":
            cached = self.storage.match(str(request.url))
            if cached is not None:
                return cached.to_response(request)
        return await self._fetch(request)

    async def aclose(self) -> None:
        await self.network.aclose()


class CacheRouterTransport(httpx.AsyncBaseTransport):
    def __init__(self, router: OfflineCacheRouter):
        self.router = router

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.router.handle(request)

    async def aclose(self) -> None:
        await self.router.aclose()
