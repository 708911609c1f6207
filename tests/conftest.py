# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from flask import Flask

from task_app import create_app
from tasktracker import handlers
from tasktracker.config import TestConfig
from tasktracker.models import db
from tasktracker.schemas import CreateTaskInput


@pytest.fixture()
def app(tmp_path: Path) -> Flask:
    """
    Fresh application per test, backed by a throwaway SQLite file.

    A file (not :memory:) so every connection sees the same database.
    """
    app = create_app(TestConfig, SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'tasks.sqlite3'}")
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def ctx(app: Flask):
    with app.app_context():
        yield


@pytest.fixture()
def client(app: Flask):
    return app.test_client()


@pytest.fixture()
def make_task(ctx):
    """Create a task through the real handler (requires an app context)."""

    def _make(title: str = "Test Task", **fields):
        return handlers.create_task(CreateTaskInput(title=title, **fields))

    return _make
