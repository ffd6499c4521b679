# src/focus_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..core.errors import TaskValidationError
from ..core.state import AppState
from ..core.timefmt import format_date, format_duration
from ..stats.aggregator import effective_time
from ..stats.history import history_with_today
from ..stats.stats_models import DailyStats
from ..tasks.task_api import (
    add_task,
    edit_task,
    open_timer,
    quick_add,
    remove_task,
    sort_for_display,
    split_active_completed,
    toggle_pin,
)
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

DUE_FORMAT = "%Y-%m-%d %H:%M"


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
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

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TaskValidationError as e:
            return f"Rejected: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def _not_found(task_id: int) -> str:
    return f"No task with id {task_id}."


def _render_task(task: Task, now: float) -> str:
    mark = "x" if task.completed else " "
    pin = "*" if task.pinned else " "
    running = " [running]" if task.is_timer_running else ""
    line = f"{pin}[{mark}] #{task.id} {task.title}  {format_duration(effective_time(task, now))}{running}"
    if task.due_at is not None:
        due = datetime.fromtimestamp(task.due_at, UTC).strftime(DUE_FORMAT)
        line += f"  due {due} UTC"
    return line


def _render_stats(stats: DailyStats) -> str:
    lines = [
        f"{format_date(stats.date)}: focus {format_duration(stats.total_focus_time)}, "
        f"{stats.completed_tasks} completed"
    ]
    for item in stats.task_breakdown:
        mark = "x" if item.completed else " "
        lines.append(f"    [{mark}] {item.title}  {format_duration(item.time)}")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Title words | optional description
    """
    raw = " ".join(args)
    title, _, description = raw.partition("|")
    task = add_task(state, title=title, description=description.strip())
    return f"Added #{task.id}: {task.title}"


def cmd_quick(state: AppState, args: list[str]) -> str:
    task = quick_add(state, " ".join(args))
    if task is None:
        return "Nothing added (empty title)."
    return f"Added #{task.id}: {task.title}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = sort_for_display(state.task_store.get_all())
    if not tasks:
        return "No tasks yet. Use /add <title>."

    now = state.clock.now()
    active, completed = split_active_completed(tasks)
    lines = ["Tasks:"]
    lines.extend(_render_task(t, now) for t in active)
    if completed:
        lines.append("Completed:")
        lines.extend(_render_task(t, now) for t in completed)
    return "\n".join(lines)


def _timer_command(action: str) -> CommandHandler:
    def handler(state: AppState, args: list[str]) -> str:
        task_id = _parse_id(args)
        if task_id is None:
            return f"Usage: /{action} <id>"

        if action == "start":
            task = open_timer(state, task_id)
        elif action == "pause":
            task = state.timer.pause(task_id)
        elif action == "stop":
            task = state.timer.stop(task_id)
        else:
            task = state.timer.toggle_complete(task_id)

        if task is None:
            return _not_found(task_id)
        return _render_task(task, state.clock.now())

    return handler


def cmd_pin(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /pin <id>"
    task = toggle_pin(state, task_id)
    if task is None:
        return _not_found(task_id)
    return f"#{task.id} {'pinned' if task.pinned else 'unpinned'}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> New title | optional new description
    """
    task_id = _parse_id(args)
    if task_id is None or len(args) < 2:
        return "Usage: /edit <id> <title> [| description]"

    title, sep, description = " ".join(args[1:]).partition("|")
    fields: dict[str, object] = {"title": title}
    if sep:
        fields["description"] = description.strip()

    task = edit_task(state, task_id, **fields)
    if task is None:
        return _not_found(task_id)
    return f"Updated #{task.id}: {task.title}"


def cmd_due(state: AppState, args: list[str]) -> str:
    """
    /due <id> YYYY-MM-DD HH:MM   (UTC)
    /due <id> none
    """
    task_id = _parse_id(args)
    if task_id is None or len(args) < 2:
        return "Usage: /due <id> <YYYY-MM-DD HH:MM> | none"

    raw = " ".join(args[1:]).strip()
    if raw.lower() == "none":
        due_at = None
    else:
        try:
            due_at = datetime.strptime(raw, DUE_FORMAT).replace(tzinfo=UTC).timestamp()
        except ValueError:
            return f"Bad date: {raw!r}. Expected YYYY-MM-DD HH:MM."

    task = edit_task(state, task_id, due_at=due_at)
    if task is None:
        return _not_found(task_id)
    return _render_task(task, state.clock.now())


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    remove_task(state, task_id)
    return f"Deleted #{task_id}."


def cmd_stats(state: AppState, args: list[str]) -> str:
    return "Today:\n" + _render_stats(state.aggregator.compute_today())


def cmd_history(state: AppState, args: list[str]) -> str:
    history = history_with_today(state.stats_store, state.aggregator)
    if not history:
        return "No history yet."
    return "\n".join(_render_stats(s) for s in history)


def cmd_clear_history(state: AppState, args: list[str]) -> str:
    if not args or args[0].lower() != "yes":
        return "This deletes all archived days. Confirm with /clearhistory yes."
    state.rollover.clear_history()
    return "History cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [| description].")
registry.register("quick", cmd_quick, help_text="Quick-add a task by title.")
registry.register("list", cmd_list, help_text="List tasks (pinned first, newest first).", aliases=["ls"])
registry.register("start", _timer_command("start"), help_text="Start (or resume) a task timer: /start <id>.")
registry.register("pause", _timer_command("pause"), help_text="Pause a task timer: /pause <id>.")
registry.register("stop", _timer_command("stop"), help_text="Stop a task timer: /stop <id>.")
registry.register("done", _timer_command("done"), help_text="Toggle completion: /done <id>.")
registry.register("pin", cmd_pin, help_text="Toggle pin: /pin <id>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> <title> [| description].")
registry.register("due", cmd_due, help_text="Set due date (UTC): /due <id> YYYY-MM-DD HH:MM | none.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
registry.register("stats", cmd_stats, help_text="Show today's focus statistics.")
registry.register("history", cmd_history, help_text="Show daily history (newest first).")
registry.register("clearhistory", cmd_clear_history, help_text="Delete all archived days.")
