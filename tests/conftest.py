"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:{tmp_path / 'todos.sqlite'}?mode=rwc"


@pytest.fixture
def app(database_url):
    return create_app(database_url)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which opens the engine.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_todo(client):
    """POST a todo and return its id (the create endpoint only answers "OK")."""

    def _create(content: str) -> int:
        response = client.post("/todos", json={"content": content})
        assert response.status_code == 200
        ids = [todo["id"] for todo in client.get("/todos").json() if todo["content"] == content]
        assert ids, f"created todo {content!r} not listed"
        return max(ids)

    return _create
