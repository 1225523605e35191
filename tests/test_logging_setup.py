# tests/test_logging_setup.py

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from listkeeper.logging_setup import ReplConsoleFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_repl_filter_hides_store_chatter_but_not_store_problems() -> None:
    f = ReplConsoleFilter()
    assert not f.filter(_record("listkeeper.tasks.task_store", logging.INFO))
    assert not f.filter(_record("listkeeper.storage.slot_storage", logging.DEBUG))
    assert f.filter(_record("listkeeper.tasks.task_list", logging.WARNING))


def test_repl_filter_passes_app_logs_and_quiets_third_party() -> None:
    f = ReplConsoleFilter()
    assert f.filter(_record("listkeeper.cli.main", logging.INFO))
    assert f.filter(_record("listkeeper", logging.INFO))
    assert not f.filter(_record("listkeeperish", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("sqlite3", logging.ERROR))


def test_setup_logging_writes_rotating_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", max_bytes=4096, backup_count=2)

    assert log_file == tmp_path / "logs" / "listkeeper.log"
    root = logging.getLogger()
    rotating = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 4096 and rotating[0].backupCount == 2

    logging.getLogger("listkeeper.tasks.task_store").debug("Task added id=%s", 7)
    rotating[0].flush()
    assert "Task added id=7" in log_file.read_text("utf-8")


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert len(logging.getLogger().handlers) == 2
