# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_service.core.config import Settings, get_settings
from todo_service.main import app
from todo_service.store.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing the store at a per-test file."""
    return Settings(db_file_path=str(tmp_path / "todo.db"))


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    return TaskStore(settings.db_file_path)


@pytest.fixture()
def api(settings: Settings):
    """TestClient against the real app, with settings overridden."""
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
