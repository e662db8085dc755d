"""
Todo persistence (raw SQL). One statement per operation.

Ids outside the sqlite INTEGER range cannot name a row, so they are answered
as "no such row" without touching the database.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from core import db


async def list_todos(engine: AsyncEngine) -> list[dict]:
    return await db.fetch_all(engine, "SELECT * FROM todo")


async def create_todo(engine: AsyncEngine, content: str) -> None:
    await db.execute(engine, "INSERT INTO todo (content) VALUES (:content)", content=content)


async def get_todo(engine: AsyncEngine, todo_id: int) -> dict | None:
    if not db.is_sqlite_integer(todo_id):
        return None
    return await db.fetch_one(engine, "SELECT * FROM todo WHERE id = :id", id=todo_id)


async def update_todo(engine: AsyncEngine, todo_id: int, content: str) -> int:
    """
    Overwrite `content`. Returns the affected-row count (0 means no such id).
    """
    if not db.is_sqlite_integer(todo_id):
        return 0
    return await db.execute(
        engine,
        "UPDATE todo SET content = :content WHERE id = :id",
        content=content,
        id=todo_id,
    )


async def delete_todo(engine: AsyncEngine, todo_id: int) -> int:
    if not db.is_sqlite_integer(todo_id):
        return 0
    return await db.execute(engine, "DELETE FROM todo WHERE id = :id", id=todo_id)
