# src/listkeeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskStore depends on a Protocol instead of a concrete storage backend.
This keeps storage swappable and makes testing easier.
"""

from typing import Protocol


class SlotStorage(Protocol):
    """Named string slots (the localStorage model)."""

    def read(self, key: str) -> str | None: ...
    def write(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def describe(self) -> str: ...
