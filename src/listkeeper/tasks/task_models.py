# src/listkeeper/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class StatusFilter(StrEnum):
    """Tri-state completion filter applied to the projection."""

    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"

    @classmethod
    def parse(cls, raw: str | None) -> StatusFilter:
        if raw is None or not raw.strip():
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown status filter {raw!r} (expected one of: {choices})") from None


def parse_due_date(raw: str | None) -> date | None:
    """
    Strict parser for user input: blank -> None, ISO YYYY-MM-DD -> date.
    Anything else raises ValueError.
    """
    if raw is None or not raw.strip():
        return None
    raw = raw.strip()
    if not ISO_DATE.fullmatch(raw):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {raw!r}")
    return date.fromisoformat(raw)


def _coerce_due_date(raw: Any) -> date | None:
    # Stored data may hold "" (no date), null, or garbage; all of those mean "unset".
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return parse_due_date(raw)
    except ValueError:
        return None


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    text: str
    completed: bool = False
    due_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, task_id: int) -> Task:
        return cls(
            id=task_id,
            text=str(raw.get("text", "")),
            completed=raw.get("completed") is True,
            due_date=_coerce_due_date(raw.get("dueDate")),
        )

    def is_overdue(self, today: date) -> bool:
        return self.due_date is not None and not self.completed and self.due_date < today
