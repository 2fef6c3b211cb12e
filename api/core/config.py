"""
Process settings read from the environment.

Every value has a fixed default, so the service runs with no configuration at
all: port 8080 and `./blog.db`.
"""

from __future__ import annotations

import os

DEFAULT_DATABASE_PATH = "./blog.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_path() -> str:
    return _env_str("BLOG_DB_PATH", DEFAULT_DATABASE_PATH)


def listen_host() -> str:
    return _env_str("HOST", DEFAULT_HOST)


def listen_port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def log_format() -> str:
    # "json" for machines, "console" for a human at a terminal.
    value = _env_str("LOG_FORMAT", "json").lower()
    return value if value in {"json", "console"} else "json"


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
