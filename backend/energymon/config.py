from __future__ import annotations

import os
from pathlib import Path
from typing import List

REPO_ROOT = Path(__file__).resolve().parents[2]


def env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return int(val.strip())
    except Exception:
        return default


def env_str(name: str, default: str) -> str:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val.strip()


def listen_host() -> str:
    return env_str("HOST", "0.0.0.0")


def listen_port() -> int:
    return env_int("PORT", 3000)


def allowed_origins() -> List[str]:
    raw = env_str("ALLOWED_ORIGINS", "*")
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def web_dir() -> Path:
    return Path(env_str("WEB_DIR", str(REPO_ROOT / "web")))
