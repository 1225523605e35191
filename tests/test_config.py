# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from listkeeper.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "LISTKEEPER_APP_NAME",
        "LISTKEEPER_DATA_DIR",
        "LISTKEEPER_STORAGE_BACKEND",
        "LISTKEEPER_SLOTS_DIR",
        "LISTKEEPER_SLOTS_DB_PATH",
        "LISTKEEPER_STORAGE_KEY",
        "LISTKEEPER_SORT_BY_DUE",
        "LISTKEEPER_CONSOLE_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "listkeeper"
    assert s.storage_backend == "file"
    assert s.storage_key == "todos"
    assert s.sort_by_due is True
    assert s.slots_dir == Path(".local/listkeeper") / "slots"


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LISTKEEPER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LISTKEEPER_STORAGE_BACKEND", "SQLite")
    monkeypatch.setenv("LISTKEEPER_STORAGE_KEY", "work")
    monkeypatch.setenv("LISTKEEPER_SORT_BY_DUE", "off")
    monkeypatch.setenv("LISTKEEPER_CONSOLE_ENABLED", "0")

    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.slots_db_path == tmp_path / "slots.sqlite3"
    assert s.storage_key == "work"
    assert s.sort_by_due is False
    assert s.console_enabled is False


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("LISTKEEPER_STORAGE_BACKEND", "redis")
    monkeypatch.setenv("LISTKEEPER_STORAGE_KEY", "   ")
    monkeypatch.setenv("LISTKEEPER_SORT_BY_DUE", "")

    s = Settings.from_env()
    assert s.storage_backend == "file"
    assert s.storage_key == "todos"
    assert s.sort_by_due is True
