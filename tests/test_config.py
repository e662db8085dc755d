"""Tests for environment settings and logging setup."""
from __future__ import annotations

import logging

from core import config
from core.logging_config import _level_number


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "WORKERS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    assert config.listen_host() == "0.0.0.0"
    assert config.listen_port() == 8080
    assert config.worker_count() == 1
    assert config.log_level() == "info"
    assert config.log_format() == "console"


def test_overrides(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("WORKERS", "4")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert config.listen_host() == "127.0.0.1"
    assert config.listen_port() == 9000
    assert config.worker_count() == 4
    assert config.log_level() == "debug"


def test_worker_count_never_below_one(monkeypatch):
    monkeypatch.setenv("WORKERS", "0")
    assert config.worker_count() == 1


def test_level_names():
    assert _level_number("info") == logging.INFO
    assert _level_number("WARNING") == logging.WARNING
    assert _level_number("debug") == logging.DEBUG
    assert _level_number("nonsense") == logging.INFO
