"""
Pydantic schemas for todo endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class TodoCreate(BaseModel):
    """
    Request body for create and update. `content` is stored as-is.
    """

    content: str


class Todo(BaseModel):
    id: int
    content: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Todo":
        return cls(id=int(row["id"]), content=row["content"])
