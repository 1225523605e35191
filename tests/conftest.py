# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from listkeeper.core.state import AppState
from listkeeper.storage.slot_storage import MemorySlotStorage
from listkeeper.tasks.task_models import Task
from listkeeper.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the caller's environment.
    """
    return SimpleNamespace(
        app_name="listkeeper",
        log_level="INFO",
        console_enabled=True,
        data_dir=tmp_path / "data",
        storage_backend="memory",
        slots_dir=tmp_path / "data" / "slots",
        slots_db_path=tmp_path / "data" / "slots.sqlite3",
        storage_key="todos",
        sort_by_due=True,
    )


@pytest.fixture()
def slots() -> MemorySlotStorage:
    return MemorySlotStorage()


@pytest.fixture()
def store(slots: MemorySlotStorage) -> TaskStore:
    return TaskStore(slots)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store, sort_by_due=True)


@pytest.fixture()
def sample_tasks() -> tuple[Task, ...]:
    """Buy milk (dated), Pay rent (undated), Call mom (completed, earliest date)."""
    return (
        Task(id=1, text="Buy milk", completed=False, due_date=date(2024, 1, 10)),
        Task(id=2, text="Pay rent", completed=False, due_date=None),
        Task(id=3, text="Call mom", completed=True, due_date=date(2024, 1, 5)),
    )
