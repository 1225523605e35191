# src/listkeeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import StatusFilter
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """Presentation-side view state plus the store it reads from."""

    # Settings object (real Settings or a test stand-in).
    settings: object
    task_store: TaskStore

    search_text: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    sort_by_due: bool = True

    def current_view(self):
        return self.task_store.view(
            self.search_text,
            self.status_filter,
            sort_by_due=self.sort_by_due,
        )
