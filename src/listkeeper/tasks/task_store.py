# src/listkeeper/tasks/task_store.py

from __future__ import annotations

import logging
from datetime import date

from ..core.ports import SlotStorage
from .task_list import (
    TaskList,
    add_task,
    build_view,
    decode_tasks,
    delete_task,
    encode_tasks,
    next_task_id,
    toggle_task,
)
from .task_models import StatusFilter, Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos"


class TaskStore:
    """
    Authoritative task list backed by one storage slot.

    - load() runs once at construction; a missing or corrupt slot means "no tasks"
    - every mutation that changes the list is written through persist()
    - nothing else reads or writes the slot

    Tasks are addressed by their stable id, never by position in a view.
    """

    def __init__(self, storage: SlotStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._tasks: TaskList = ()
        self._next_id = 1
        self.load()
        logger.info(
            "TaskStore ready storage=%s key=%s total=%s",
            storage.describe(),
            key,
            len(self._tasks),
        )

    @property
    def tasks(self) -> TaskList:
        return self._tasks

    @property
    def storage_key(self) -> str:
        return self._key

    def describe_storage(self) -> str:
        return self._storage.describe()

    # ---- persistence ----

    def load(self) -> TaskList:
        """Replace in-memory state with the slot contents. Never raises."""
        try:
            raw = self._storage.read(self._key)
        except Exception:
            logger.warning("Failed to read slot %s; starting with an empty list.", self._key, exc_info=True)
            raw = None

        self._tasks = decode_tasks(raw)
        self._next_id = next_task_id(self._tasks)
        logger.debug("Loaded %d tasks from slot %s", len(self._tasks), self._key)
        return self._tasks

    def persist(self) -> None:
        """Overwrite the slot with the current list. Write errors propagate."""
        self._storage.write(self._key, encode_tasks(self._tasks))

    def _commit(self, new_tasks: TaskList) -> bool:
        if new_tasks is self._tasks:
            return False
        previous = self._tasks
        self._tasks = new_tasks
        try:
            self.persist()
        except Exception:
            # Keep memory and slot in agreement when the write fails.
            self._tasks = previous
            raise
        return True

    # ---- mutations ----

    def add(self, text: str, due_date: date | None = None) -> Task | None:
        """Append a task; returns it, or None when text is blank."""
        if not self._commit(add_task(self._tasks, text, due_date, task_id=self._next_id)):
            return None
        self._next_id += 1
        task = self._tasks[-1]
        logger.debug("Task added id=%s due=%s", task.id, task.due_date)
        return task

    def toggle(self, task_id: int) -> bool:
        changed = self._commit(toggle_task(self._tasks, task_id))
        if changed:
            logger.debug("Task toggled id=%s", task_id)
        return changed

    def delete(self, task_id: int) -> bool:
        changed = self._commit(delete_task(self._tasks, task_id))
        if changed:
            logger.debug("Task deleted id=%s", task_id)
        return changed

    def get(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- queries ----

    def view(
        self,
        search_text: str = "",
        status_filter: StatusFilter = StatusFilter.ALL,
        *,
        sort_by_due: bool = True,
    ) -> TaskList:
        return build_view(self._tasks, search_text, status_filter, sort_by_due=sort_by_due)

    def count_tasks(self) -> int:
        return len(self._tasks)

    def count_completed(self) -> int:
        return sum(1 for t in self._tasks if t.completed)
