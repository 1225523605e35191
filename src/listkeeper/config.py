# src/listkeeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every variable has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "LISTKEEPER"

STORAGE_BACKENDS = ("file", "sqlite", "memory")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    slots_dir: Path
    slots_db_path: Path
    storage_key: str

    # ---- View ----
    sort_by_due: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "listkeeper").strip() or "listkeeper"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/listkeeper"))
        storage_backend = _env_choice(_k("STORAGE_BACKEND"), "file", STORAGE_BACKENDS)
        slots_dir = _env_path(_k("SLOTS_DIR"), data_dir / "slots")
        slots_db_path = _env_path(_k("SLOTS_DB_PATH"), data_dir / "slots.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), "todos").strip() or "todos"

        sort_by_due = _env_bool(_k("SORT_BY_DUE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            storage_backend=storage_backend,
            slots_dir=slots_dir,
            slots_db_path=slots_db_path,
            storage_key=storage_key,
            sort_by_due=sort_by_due,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
