# src/listkeeper/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable
from datetime import date
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import StatusFilter, Task, parse_due_date

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

DUE_TOKEN = re.compile(r"(?:^|(?<=\s))due:(\S*)\s*")
RAW_REST = re.compile(r"^\s*\S+\s?")


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        # Handlers that take the rest of the line verbatim as a single argument.
        self._raw_args: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_args: bool = False,
    ) -> None:
        aliases = aliases or []
        names = [name.lower(), *(a.lower() for a in aliases)]
        self._help[names[0]] = help_text
        for key in names:
            self._handlers[key] = handler
            if raw_args:
                self._raw_args.add(key)
            else:
                self._raw_args.discard(key)

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        if name in self._raw_args:
            rest = RAW_REST.sub("", line[1:], count=1)
            args = [rest] if rest.strip() else []

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_task(task: Task, today: date) -> str:
    box = "[x]" if task.completed else "[ ]"
    due = f"due {task.due_date.isoformat()}" if task.due_date else "no date"
    line = f"{box} #{task.id} {task.text}  ({due})"
    if task.is_overdue(today):
        line += "  OVERDUE"
    return line


def render_view(state: AppState, today: date | None = None) -> str:
    if today is None:
        today = date.today()
    tasks = state.current_view()
    if not tasks:
        return "No tasks found"
    return "\n".join(format_task(t, today) for t in tasks)


# ---- input helpers ----


def split_due_token(raw: str) -> tuple[str, date | None]:
    """
    Pull a `due:YYYY-MM-DD` token out of free text.
    The last token wins; an empty `due:` means no date. Bad dates raise ValueError.
    """
    matches = DUE_TOKEN.findall(raw)
    due_date = parse_due_date(matches[-1]) if matches else None
    text = DUE_TOKEN.sub("", raw).strip()
    return text, due_date


def add_from_text(state: AppState, raw: str) -> str:
    try:
        text, due_date = split_due_token(raw)
    except ValueError:
        return "Invalid due date. Use due:YYYY-MM-DD."

    if not text:
        return "Nothing to add."

    task = state.task_store.add(text, due_date)
    if task is None:
        return "Nothing to add."
    return f"Added #{task.id}.\n{render_view(state)}"


def _parse_task_id(args: list[str]) -> int | None:
    if not args:
        return None
    raw = args[0].lstrip("#")
    try:
        return int(raw)
    except ValueError:
        return None


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk               -> task without a date
    /add Pay rent due:2024-02-01 -> task with a due date
    """
    if not args:
        return "Usage: /add <text> [due:YYYY-MM-DD]"
    return add_from_text(state, " ".join(args))


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_view(state)


def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    if state.task_store.get(task_id) is None:
        return f"No task with id {task_id}."

    state.task_store.toggle(task_id)
    task = state.task_store.get(task_id)
    if emit is not None and task is not None:
        emit(f"#{task_id} marked {'done' if task.completed else 'not done'}.")
    return render_view(state)


def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    if state.task_store.get(task_id) is None:
        return f"No task with id {task_id}."

    state.task_store.delete(task_id)
    if emit is not None:
        emit(f"#{task_id} deleted.")
    return render_view(state)


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    /search        -> clear search
    /search <text> -> case-insensitive substring search
    """
    state.search_text = args[0] if args else ""
    return render_view(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.status_filter.value}. Use /filter all | completed | incomplete."
    try:
        state.status_filter = StatusFilter.parse(args[0])
    except ValueError:
        return "Usage: /filter all | completed | incomplete"
    return render_view(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    total = store.count_tasks()
    done = store.count_completed()
    search = repr(state.search_text) if state.search_text else "(none)"
    sort_mode = "due date" if state.sort_by_due else "creation order"
    return (
        "Status:\n"
        f"  Tasks: {total} ({done} completed, {total - done} open)\n"
        f"  Search: {search}\n"
        f"  Filter: {state.status_filter.value}\n"
        f"  Sort: {sort_mode}\n"
        f"  Storage: {store.describe_storage()} key={store.storage_key}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <text> [due:YYYY-MM-DD].", raw_args=True
)
registry.register("list", cmd_list, help_text="Show tasks (search/filter applied).", aliases=["ls"])
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <id>.", aliases=["done", "x"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm", "del"])
registry.register(
    "search",
    cmd_search,
    help_text="Search task text: /search [text] (empty clears).",
    raw_args=True,
)
registry.register(
    "filter", cmd_filter, help_text="Status filter: /filter all | completed | incomplete."
)
registry.register("status", cmd_status, help_text="Show counts, search, filter and storage.")
