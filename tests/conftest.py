# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_tracker.database import Database
from task_tracker.main import create_app
from task_tracker.repository import TaskRepository


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture()
def database(database_url: str):
    db = Database(database_url)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture()
def repo(database: Database):
    """TaskRepository over a fresh SQLite file per test."""
    with database.session() as session:
        yield TaskRepository(session)


@pytest.fixture()
def client(database_url: str):
    app = create_app(database_url)
    with TestClient(app) as c:
        yield c
