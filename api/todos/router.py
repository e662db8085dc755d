"""
Todo API endpoints.

Routes are bound from the static `ROUTES` table below. The `{todo_id:signed_int}`
convertor matches any signed integer and keeps everything else from ever
reaching a handler.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.convertors import Convertor, register_url_convertor

from core import db

from . import repository, schemas


class SignedIntegerConvertor(Convertor[int]):
    regex = "-?[0-9]+"

    def convert(self, value: str) -> int:
        return int(value)

    def to_string(self, value: int) -> str:
        return str(int(value))


register_url_convertor("signed_int", SignedIntegerConvertor())


async def list_todos(engine: AsyncEngine = Depends(db.get_engine)) -> Response:
    rows = await repository.list_todos(engine)
    return JSONResponse([schemas.Todo.from_row(row).model_dump() for row in rows])


async def add_todo(
    request: schemas.TodoCreate,
    engine: AsyncEngine = Depends(db.get_engine),
) -> Response:
    await repository.create_todo(engine, request.content)
    return PlainTextResponse("OK")


async def get_single_todo(todo_id: int, engine: AsyncEngine = Depends(db.get_engine)) -> Response:
    row = await repository.get_todo(engine, todo_id)
    if row is None:
        return PlainTextResponse("Not Found", status_code=404)
    return JSONResponse(schemas.Todo.from_row(row).model_dump())


async def update_todo(
    todo_id: int,
    request: schemas.TodoCreate,
    engine: AsyncEngine = Depends(db.get_engine),
) -> Response:
    affected = await repository.update_todo(engine, todo_id, request.content)
    if affected == 0:
        return PlainTextResponse("Todo not found", status_code=404)
    return PlainTextResponse("Todo Updated")


async def delete_todo(todo_id: int, engine: AsyncEngine = Depends(db.get_engine)) -> Response:
    affected = await repository.delete_todo(engine, todo_id)
    if affected == 0:
        return PlainTextResponse(f"No Todo with id: {todo_id} found!", status_code=404)
    return PlainTextResponse("Todo Deleted")


# (method, path, endpoint)
ROUTES: tuple[tuple[str, str, Callable[..., Any]], ...] = (
    ("GET", "/todos", list_todos),
    ("POST", "/todos", add_todo),
    ("GET", "/todos/{todo_id:signed_int}", get_single_todo),
    ("PUT", "/todos/{todo_id:signed_int}", update_todo),
    ("DELETE", "/todos/{todo_id:signed_int}", delete_todo),
)

router = APIRouter()

for method, path, endpoint in ROUTES:
    router.add_api_route(path, endpoint, methods=[method])
