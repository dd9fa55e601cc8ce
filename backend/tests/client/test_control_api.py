import asyncio

import httpx
import pytest

from energymon.client.api import DashboardApi
from energymon.client.view import DashboardView


def post(handler, body=None):
    view = DashboardView()

    async def go():
        async with httpx.AsyncClient(base_url="http://hub", transport=httpx.MockTransport(handler)) as client:
            return await DashboardApi(client, view=view).post_control(body or {"cmd": "noop"})

    return asyncio.run(go()), view


@pytest.mark.parametrize("response, expected", [
    (httpx.Response(200, json={"status": "OK", "message": "Command received"}), "Command received"),
    (httpx.Response(200, json={"status": "OK"}), "OK"),
    (httpx.Response(400, json={"status": "ERR", "message": "bad"}), "bad"),
    (httpx.Response(500, text="oops"), "Error"),
    (httpx.Response(200, json={"offline": True}), "Error"),
])
def test_control_toast(response, expected):
    msg, view = post(lambda request: response)
    assert msg == expected
    assert view.last_toast == expected


def test_control_transport_failure_toasts():
    def handler(request):
        raise httpx.ConnectError("down")

    msg, view = post(handler)
    assert msg == "Failed to send command"
    assert view.last_toast == "Failed to send command"


def test_control_sends_json_body():
    seen = {}

    def handler(request: httpx.Request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(200, json={"status": "OK", "message": "Command received"})

    post(handler, {"threshold": 500})
    assert seen["method"] == "POST"
    assert seen["path"] == "/control"
    assert b'"threshold"' in seen["body"]
