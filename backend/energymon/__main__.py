from __future__ import annotations

import logging

import uvicorn

from energymon.config import listen_host, listen_port
from energymon.logging_setup import configure_logging

log = logging.getLogger("energymon")


def main() -> None:
    configure_logging()
    port = listen_port()

    log.info("=== Smart Energy Monitor Server ===")
    log.info("Server running on http://localhost:%d", port)
    log.info("Web dashboard: http://localhost:%d", port)
    log.info("API endpoint: http://localhost:%d/api/energy", port)
    log.info("Status endpoint: http://localhost:%d/status", port)
    log.info("Waiting for sensor data...")

    uvicorn.run("energymon.main:app", host=listen_host(), port=port)


if __name__ == "__main__":
    main()
