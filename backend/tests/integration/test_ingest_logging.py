import json
import logging

from fastapi.testclient import TestClient

from energymon.logging_setup import JsonLineFormatter


def test_ingest_logs_normalized_values(client: TestClient, caplog):
    with caplog.at_level(logging.INFO, logger="energymon"):
        client.post("/api/energy", json={"pA": "700", "pB": None, "fan": "1"})

    messages = [r.getMessage() for r in caplog.records if r.name == "energymon.services.ingest"]
    assert messages == ["Received: pA=700 mW, pB=0 mW, fan=ON"]


def test_json_line_formatter():
    record = logging.LogRecord("energymon.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    payload = json.loads(JsonLineFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "energymon.test"
    assert payload["msg"] == "hello world"
    assert "ts" in payload
