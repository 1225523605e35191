# src/listkeeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the slot storage backend and TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.slot_storage import open_slot_storage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend == "file":
        settings.slots_dir.mkdir(parents=True, exist_ok=True)
    elif settings.storage_backend == "sqlite":
        settings.slots_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = open_slot_storage(settings)
    task_store = TaskStore(storage, key=settings.storage_key)

    return AppState(
        settings=settings,
        task_store=task_store,
        sort_by_due=bool(getattr(settings, "sort_by_due", True)),
    )
