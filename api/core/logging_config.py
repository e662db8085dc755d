"""
Structured logging setup (structlog).

- console: human-readable, colored output
- json: one JSON object per line
"""

from __future__ import annotations

import logging
import sys

import structlog


def _level_number(level: str) -> int:
    value = logging.getLevelName((level or "").strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "info", fmt: str = "console") -> None:
    level_number = _level_number(level)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_number),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # uvicorn / asyncio go through stdlib logging.
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level_number)
