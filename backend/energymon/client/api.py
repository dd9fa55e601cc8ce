"""
api.py

Purpose:
  Thin httpx wrapper around the two dashboard calls:
    - GET  /status   -> DerivedStatus (raises StatusFetchError on any failure)
    - POST /control  -> toast text on the view (never raises)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from energymon.client.view import DashboardView
from energymon.models.domain import DerivedStatus

log = logging.getLogger(__name__)


class StatusFetchError(Exception):
    """A poll that produced no usable snapshot (transport, HTTP status, or body)."""


class DashboardApi:
    def __init__(self, client: httpx.AsyncClient, view: Optional[DashboardView] = None):
        self.client = client
        self.view = view

    async def fetch_status(self) -> DerivedStatus:
        try:
            res = await self.client.get("/status", headers={"Cache-Control": "no-store"})
            res.raise_for_status()
            return DerivedStatus.model_validate(res.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            # ValidationError covers the offline stub {"offline": true}
            raise StatusFetchError(str(e)) from e

    async def post_control(self, body: Dict[str, Any]) -> str:
        try:
            res = await self.client.post("/control", json=body)
        except httpx.HTTPError as e:
            log.debug("Control submission failed: %s", e)
            return self._toast("Failed to send command")

        try:
            j = res.json()
        except ValueError:
            j = {}
        if not isinstance(j, dict):
            j = {}

        if j.get("status") == "OK":
            return self._toast(j.get("message") or "OK")
        return self._toast(j.get("message") or "Error")

    def _toast(self, msg: str) -> str:
        if self.view is not None:
            self.view.toast(msg)
        return msg
