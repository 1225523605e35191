# src/listkeeper/tasks/task_list.py

"""
Pure operations over a task list.

A task list is an immutable tuple of Task in creation order. Every mutation
returns a new tuple; the projection (build_view) never touches the base list.
Persistence lives in TaskStore, not here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from typing import Any

from .task_models import StatusFilter, Task

logger = logging.getLogger(__name__)

TaskList = tuple[Task, ...]


# ---- codec ----


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks to the slot format (deterministic for equal lists)."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)


def decode_tasks(raw: str | None) -> TaskList:
    """
    Parse the slot contents into a task list.

    Never raises: missing or unparsable data yields an empty list.
    Entries without usable text are dropped; entries without a valid unique id
    get one after the highest id seen.
    """
    if raw is None or not raw.strip():
        return ()

    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Stored task list is not valid JSON; starting empty.")
        return ()

    if not isinstance(data, list):
        logger.warning("Stored task list is %s, expected a list; starting empty.", type(data).__name__)
        return ()

    entries: list[dict[str, Any]] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        text = item.get("text")
        if not isinstance(text, str) or not text.strip():
            continue
        entries.append(item)

    dropped = len(data) - len(entries)
    if dropped:
        logger.warning("Dropped %d malformed task entries while loading.", dropped)

    seen: set[int] = set()
    for item in entries:
        tid = item.get("id")
        if _is_valid_id(tid):
            seen.add(tid)
    next_id = max(seen, default=0) + 1

    used: set[int] = set()
    out: list[Task] = []
    for item in entries:
        tid = item.get("id")
        if _is_valid_id(tid) and tid not in used:
            assigned = tid
        else:
            assigned = next_id
            next_id += 1
        used.add(assigned)
        out.append(Task.from_dict(item, task_id=assigned))
    return tuple(out)


def _is_valid_id(value: Any) -> bool:
    # bool is an int subclass; True must not become id 1.
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


# ---- mutations ----


def next_task_id(tasks: Iterable[Task]) -> int:
    return max((t.id for t in tasks), default=0) + 1


def add_task(
    tasks: TaskList,
    text: str,
    due_date: date | None = None,
    *,
    task_id: int | None = None,
) -> TaskList:
    """Append a new incomplete task. Blank text is ignored (list returned unchanged)."""
    if not text or not text.strip():
        logger.debug("Ignoring add with blank text.")
        return tasks
    if task_id is None:
        task_id = next_task_id(tasks)
    return (*tasks, Task(id=task_id, text=text, completed=False, due_date=due_date))


def toggle_task(tasks: TaskList, task_id: int) -> TaskList:
    """Flip `completed` on the task with the given id; unknown ids are a no-op."""
    if not any(t.id == task_id for t in tasks):
        logger.warning("toggle: no task with id=%s", task_id)
        return tasks
    return tuple(replace(t, completed=not t.completed) if t.id == task_id else t for t in tasks)


def delete_task(tasks: TaskList, task_id: int) -> TaskList:
    """Remove the task with the given id; unknown ids are a no-op."""
    kept = tuple(t for t in tasks if t.id != task_id)
    if len(kept) == len(tasks):
        logger.warning("delete: no task with id=%s", task_id)
        return tasks
    return kept


# ---- projection ----


def sort_by_due_date(tasks: Iterable[Task]) -> list[Task]:
    """Stable ascending sort by due date; undated tasks go last in base order."""
    return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or date.min))


def matches_text(task: Task, search_text: str) -> bool:
    if not search_text:
        return True
    return search_text.lower() in task.text.lower()


def matches_status(task: Task, status_filter: StatusFilter) -> bool:
    if status_filter == StatusFilter.COMPLETED:
        return task.completed
    if status_filter == StatusFilter.INCOMPLETE:
        return not task.completed
    return True


def build_view(
    tasks: Iterable[Task],
    search_text: str = "",
    status_filter: StatusFilter = StatusFilter.ALL,
    *,
    sort_by_due: bool = True,
) -> TaskList:
    """
    Derive the read-only projection shown to the user:
    sort (optional) -> text filter -> status filter.
    """
    ordered = sort_by_due_date(tasks) if sort_by_due else list(tasks)
    return tuple(
        t for t in ordered if matches_text(t, search_text) and matches_status(t, status_filter)
    )
