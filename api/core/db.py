"""
Async database access helpers (raw SQL) on a SQLAlchemy AsyncEngine.

The engine (and its connection pool) is opened once by the FastAPI lifespan,
kept on `app.state.engine` and disposed on shutdown (see `api/main.py`).
Handlers receive it through the `get_engine` dependency.

Connections go back to the pool rolled back, so a failed statement never
leaves a transaction (or a sqlite lock) behind.

SQL parameter style:
- `text()` uses named placeholders: :id, :content, ...
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlsplit

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

DEFAULT_DATABASE_URL = "sqlite:db.sqlite?mode=rwc"
DEFAULT_POOL_SIZE = 5
DEFAULT_POOL_TIMEOUT = 30.0

# Range of a sqlite INTEGER (signed 64-bit).
SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS todo (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content TEXT
)
"""


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL


def pool_size() -> int:
    raw = os.environ.get("DATABASE_POOL_SIZE", "").strip()
    if not raw:
        return DEFAULT_POOL_SIZE
    size = int(raw)
    if size < 1:
        raise RuntimeError("DATABASE_POOL_SIZE must be at least 1.")
    return size


def pool_timeout() -> float:
    return float(os.environ.get("DATABASE_POOL_TIMEOUT", "").strip() or DEFAULT_POOL_TIMEOUT)


def database_path(url: str) -> str:
    """
    Map `sqlite:<path>`, `sqlite://<path>` or a bare path to a file path.

    Query parameters (e.g. `?mode=rwc`) are dropped: sqlite creates the file
    when it is missing.
    """
    url = (url or "").strip()
    parts = urlsplit(url)
    if parts.scheme != "sqlite":
        return url.split("?", 1)[0] or ":memory:"
    return (parts.netloc + parts.path) or ":memory:"


def engine_url(url: str) -> str:
    """
    SQLAlchemy URL (aiosqlite driver) for a `sqlite:` URL or a bare path.

    URLs that already name the driver are passed through.
    """
    url = (url or "").strip()
    if url.startswith("sqlite+aiosqlite:"):
        return url
    path = database_path(url)
    if path == ":memory:":
        return "sqlite+aiosqlite://"
    return f"sqlite+aiosqlite:///{path}"


def is_sqlite_integer(value: int) -> bool:
    return SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX


async def open_engine(
    url: str | None = None,
    *,
    size: int | None = None,
    timeout: float | None = None,
) -> AsyncEngine:
    """
    Create the engine for `url` (default: DATABASE_URL) and make sure the schema exists.

    Any failure here propagates; the app must not serve without a schema.
    """
    sa_url = engine_url(url if url is not None else database_url())
    if sa_url == "sqlite+aiosqlite://":
        # An in-memory database lives inside one connection.
        engine = create_async_engine(sa_url, poolclass=StaticPool)
    else:
        engine = create_async_engine(
            sa_url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=size if size is not None else pool_size(),
            max_overflow=0,
            pool_timeout=timeout if timeout is not None else pool_timeout(),
        )

    try:
        async with engine.begin() as conn:
            await conn.execute(text(SCHEMA_SQL))
    except Exception:
        await engine.dispose()
        raise
    return engine


async def fetch_one(engine: AsyncEngine, sql: str, **params: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    async with engine.connect() as conn:
        result = await conn.execute(text(sql), params)
        row = result.mappings().first()
    return dict(row) if row is not None else None


async def fetch_all(engine: AsyncEngine, sql: str, **params: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    async with engine.connect() as conn:
        result = await conn.execute(text(sql), params)
        rows = result.mappings().all()
    return [dict(r) for r in rows]


async def execute(engine: AsyncEngine, sql: str, **params: Any) -> int:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) in its own transaction.

    Returns the affected-row count.
    """
    async with engine.begin() as conn:
        result = await conn.execute(text(sql), params)
        affected = result.rowcount
    return affected


def get_engine(request: Request) -> AsyncEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("DB engine is not initialized. Start the app with its lifespan.")
    return engine
