# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tasktracker.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("tasktracker.handlers", logging.DEBUG))
    assert f.filter(_record("werkzeug", logging.INFO))
    assert not f.filter(_record("sqlalchemy.engine", logging.INFO))
    assert f.filter(_record("sqlalchemy.engine", logging.WARNING))


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("tasktracker.test").debug("hello from test")
    for h in restore_root_logging.handlers:
        h.flush()

    assert len(restore_root_logging.handlers) == 2
    assert "hello from test" in (tmp_path / "logs" / "tasktracker.log").read_text(encoding="utf-8")


def test_setup_logging_console_only(restore_root_logging) -> None:
    setup_logging()
    assert len(restore_root_logging.handlers) == 1
