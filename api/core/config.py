"""
Process settings read from the environment.

Each setting is a function so tests and the CLI always see the current value.
"""

from __future__ import annotations

import os

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def _env(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def listen_host() -> str:
    return _env("HOST", DEFAULT_HOST)


def listen_port() -> int:
    return int(_env("PORT", str(DEFAULT_PORT)))


def worker_count() -> int:
    return max(1, int(_env("WORKERS", "1")))


def log_level() -> str:
    return _env("LOG_LEVEL", "info").lower()


def log_format() -> str:
    # "json" or "console"
    return _env("LOG_FORMAT", "console").lower()
