"""
logging_setup.py

Purpose:
  One-shot logging configuration shared by the server and the dashboard client.

Outputs:
  - **Console**: `[LEVEL] logger: message` on stderr.
  - **File (optional)**: when `LOG_DIR` is set, every record is also appended to
    `LOG_DIR/backend.jsonl` as one JSON object per line (`ts`, `level`, `logger`, `msg`).
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime

from energymon.config import env_str

LOG_FILE_NAME = "backend.jsonl"

_configured = False


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger("energymon")
    root.setLevel(env_str("LOG_LEVEL", "INFO").upper())

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(console)

    log_dir = os.getenv("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, LOG_FILE_NAME), encoding="utf-8")
        fh.setFormatter(JsonLineFormatter())
        root.addHandler(fh)

    _configured = True
