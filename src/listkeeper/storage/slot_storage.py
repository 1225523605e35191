# src/listkeeper/storage/slot_storage.py

"""
Persistent key-value slots.

A slot holds one string value under a name (the `localStorage` model).
Three backends share the SlotStorage port (see core/ports.py):
- FileSlotStorage: one JSON file per slot, atomic replace on write
- SqliteSlotStorage: a single key/value table
- MemorySlotStorage: process-local dict (tests, throwaway sessions)
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_key(key: str) -> str:
    if not key or not _SAFE_KEY.match(key) or key in (".", ".."):
        raise ValueError(f"Invalid slot key: {key!r}")
    return key


class MemorySlotStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._slots.get(_check_key(key))

    def write(self, key: str, value: str) -> None:
        self._slots[_check_key(key)] = value

    def remove(self, key: str) -> None:
        self._slots.pop(_check_key(key), None)

    def describe(self) -> str:
        return "memory"


class FileSlotStorage:
    """
    File-backed slots: `<directory>/<key>.json`.

    Writes go to a sibling .tmp file first and are moved into place with
    os.replace, so a crash never leaves a half-written slot behind.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileSlotStorage ready dir=%s", self._dir)

    def _path(self, key: str) -> Path:
        return self._dir / f"{_check_key(key)}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(value, "utf-8")
            os.replace(tmp, path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        with contextlib.suppress(OSError):
            os.chmod(path, 0o600)
        logger.debug("Slot written key=%s bytes=%d path=%s", key, len(value), path)

    def remove(self, key: str) -> None:
        with contextlib.suppress(FileNotFoundError):
            self._path(key).unlink()

    def describe(self) -> str:
        return f"file:{self._dir}"


class SqliteSlotStorage:
    """
    SQLite slot table.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "slots.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteSlotStorage ready db=%s", self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def read(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT value FROM slots WHERE key = ?", (_check_key(key),))
            row = cur.fetchone()
            return str(row[0]) if row else None
        finally:
            conn.close()

    def write(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO slots(key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (_check_key(key), value, time.time()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Slot written key=%s bytes=%d db=%s", key, len(value), self._db_path)

    def remove(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM slots WHERE key = ?", (_check_key(key),))
            conn.commit()
        finally:
            conn.close()

    def describe(self) -> str:
        return f"sqlite:{self._db_path}"


def open_slot_storage(settings) -> MemorySlotStorage | FileSlotStorage | SqliteSlotStorage:
    """Build the backend named by settings.storage_backend."""
    backend = str(getattr(settings, "storage_backend", "file")).strip().lower()
    if backend == "file":
        return FileSlotStorage(settings.slots_dir)
    if backend == "sqlite":
        return SqliteSlotStorage(settings.slots_db_path)
    if backend == "memory":
        return MemorySlotStorage()
    raise ValueError(f"Unknown storage backend: {backend!r} (expected file, sqlite or memory)")
