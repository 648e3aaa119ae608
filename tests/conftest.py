"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from user_api.app.core.config import Settings
from user_api.app.core.db import Database
from user_api.app.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "users.sqlite3"),
        environment="test",
        log_level="INFO",
    )


@pytest.fixture()
def database(tmp_path: Path) -> Iterator[Database]:
    db = Database(str(tmp_path / "repository.sqlite3"))
    db.connect()
    yield db
    db.close()


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    """Client for an application backed by a fresh database file."""
    app = create_app(settings=settings)
    with TestClient(app) as test_client:
        yield test_client
