"""
Error mapping for faults that are not part of the API contract.

"Not found" is answered by the handlers themselves. Any other fault while
serving a request (database error, an unbindable value, a stored row that no
longer fits the record schema) fails only that request: it is logged and
answered with a plain-text 500.
"""

from __future__ import annotations

import pydantic
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

log = structlog.get_logger()

REQUEST_FAULTS: tuple[type[Exception], ...] = (
    SQLAlchemyError,
    OverflowError,
    pydantic.ValidationError,
)


async def request_fault_handler(request: Request, exc: Exception) -> PlainTextResponse:
    log.error(
        "request_fault",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=exc,
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


def install_error_handlers(app: FastAPI) -> None:
    for exc_class in REQUEST_FAULTS:
        app.add_exception_handler(exc_class, request_fault_handler)
