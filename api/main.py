from __future__ import annotations

import argparse
import os
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from core import config, db
from core.errors import install_error_handlers
from core.logging_config import setup_logging
from core.request_logger import RequestLoggerMiddleware
from todos import router as todos_router

log = structlog.get_logger()


def create_app(database_url: str | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One engine (and connection pool) per process, shared by every request.
        app.state.engine = await db.open_engine(database_url)
        log.info("database_ready", url=app.state.engine.url.render_as_string())
        try:
            yield
        finally:
            await app.state.engine.dispose()
            app.state.engine = None

    app = FastAPI(title="todo-api", lifespan=lifespan)
    app.add_middleware(RequestLoggerMiddleware)
    install_error_handlers(app)
    app.include_router(todos_router.router, tags=["todos"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


setup_logging(config.log_level(), config.log_format())
app = create_app()


def run(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="todo-api", description="Serve the todo HTTP API.")
    parser.add_argument("--host", default=config.listen_host())
    parser.add_argument("--port", type=int, default=config.listen_port())
    parser.add_argument("--workers", type=int, default=config.worker_count())
    parser.add_argument("--log-level", default=config.log_level())
    args = parser.parse_args(argv)

    # Worker processes re-import this module and read the level from the env.
    os.environ["LOG_LEVEL"] = args.log_level
    setup_logging(args.log_level, config.log_format())
    log.info("server_starting", host=args.host, port=args.port, workers=args.workers)
    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        workers=args.workers,
        log_level=args.log_level,
        access_log=False,
    )


if __name__ == "__main__":
    run()
