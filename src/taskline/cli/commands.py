# src/taskline/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.errors import (
    InvalidFormatError,
    InvalidTaskNumberError,
    StorageIOError,
    TaskLineError,
)
from ..core.state import AppState
from ..tasks.datetime_parser import parse_datetime
from ..tasks.task_models import Deadline, Event, Task, Todo

# handler(state, args, line) -> reply
#   args: up to two tokens after the keyword, the second keeps the rest of the line
#   line: the full stripped input line
CommandHandler = Callable[[AppState, list[str], str], str]

EXIT_KEYWORD = "bye"
EMPTY_LINE_REPLY = "Please enter a valid command. Type 'help' to list available commands."

logger = logging.getLogger(__name__)


def is_exit_command(line: str) -> bool:
    return line.strip().lower() == EXIT_KEYWORD


def tokenize(line: str) -> list[str]:
    """Split into at most three tokens: keyword, first argument, rest of the line."""
    return line.strip().split(None, 2)


class CommandRegistry:
    """Keyword -> handler table used by the console connector."""

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

    def handle(self, state: AppState, line: str) -> str:
        """
        Run one command line and return the reply text.

        Domain errors become "Error: ..." replies; StorageIOError propagates so
        the caller can stop instead of running on with memory and disk out of sync.
        """
        line = line.strip()
        tokens = tokenize(line)
        if not tokens:
            return EMPTY_LINE_REPLY

        name = tokens[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: {tokens[0]}. Type 'help' to list available commands."

        try:
            return handler(state, tokens[1:], line)
        except StorageIOError:
            raise
        except TaskLineError as e:
            logger.debug("Command %r rejected: %s", name, e)
            return f"Error: {e.message}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        lines.append(f"  {EXIT_KEYWORD} - Save and exit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _parse_task_number(args: list[str]) -> int:
    # Plain ASCII digits only: int() would also take "+1", "1_0" and other scripts.
    if not args or not (args[0].isascii() and args[0].isdigit()):
        raise InvalidTaskNumberError()
    n = int(args[0])
    if n < 1:
        raise InvalidTaskNumberError()
    return n


def _count_line(n: int) -> str:
    return f"Now you have {n} task(s) in the list."


def _numbered(tasks: tuple[Task, ...] | list[Task]) -> list[str]:
    return [f"  {i}. {t}" for i, t in enumerate(tasks, start=1)]


def _added(state: AppState, task: Task) -> str:
    n = state.task_store.add(task)
    return f"Added:\n  {n}. {task}\n{_count_line(n)}"


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], line: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], line: str) -> str:
    tasks = state.task_store.list_tasks()
    if not tasks:
        return "Your task list is empty."
    return "\n".join(["Your tasks:", *_numbered(tasks)])


def cmd_todo(state: AppState, args: list[str], line: str) -> str:
    return _added(state, Todo.from_command(line, now=state.clock()))


def cmd_deadline(state: AppState, args: list[str], line: str) -> str:
    return _added(state, Deadline.from_command(line, now=state.clock()))


def cmd_event(state: AppState, args: list[str], line: str) -> str:
    return _added(state, Event.from_command(line, now=state.clock()))


def cmd_mark(state: AppState, args: list[str], line: str) -> str:
    task, changed = state.task_store.set_done(_parse_task_number(args), True)
    if not changed:
        return f"This task is already marked as done:\n  {task}"
    return f"Marked as done:\n  {task}"


def cmd_unmark(state: AppState, args: list[str], line: str) -> str:
    task, changed = state.task_store.set_done(_parse_task_number(args), False)
    if not changed:
        return f"This task is already not done:\n  {task}"
    return f"Marked as not done:\n  {task}"


def cmd_delete(state: AppState, args: list[str], line: str) -> str:
    task, n = state.task_store.delete(_parse_task_number(args))
    return f"Deleted:\n  {task}\n{_count_line(n)}"


def cmd_find(state: AppState, args: list[str], line: str) -> str:
    parts = line.split(None, 1)
    keyword = parts[1].strip() if len(parts) == 2 else ""
    if not keyword:
        raise InvalidFormatError("Enter it as: find <keyword>")

    matches = state.task_store.find_by_keyword(keyword)
    if not matches:
        return f"No tasks containing '{keyword}' found."
    return "\n".join([f"Tasks containing '{keyword}':", *_numbered(matches)])


def cmd_postpone(state: AppState, args: list[str], line: str) -> str:
    index = _parse_task_number(args)
    if len(args) < 2:
        raise InvalidFormatError("Enter it as: postpone <task number> <d/M/yyyy HHmm>")
    task = state.task_store.reschedule(index, parse_datetime(args[1]))
    return f"Postponed:\n  {index}. {task}"


registry.register("help", cmd_help, help_text="Show available commands.")
registry.register("list", cmd_list, help_text="Show all tasks.")
registry.register("todo", cmd_todo, help_text="Add a task: todo <description>.")
registry.register(
    "deadline",
    cmd_deadline,
    help_text="Add a task with a due date: deadline <description> /by <d/M/yyyy HHmm>.",
)
registry.register(
    "event",
    cmd_event,
    help_text="Add an event: event <description> /from <d/M/yyyy HHmm> /to <d/M/yyyy HHmm>.",
)
registry.register("mark", cmd_mark, help_text="Mark task n as done: mark <n>.")
registry.register("unmark", cmd_unmark, help_text="Mark task n as not done: unmark <n>.")
registry.register("delete", cmd_delete, help_text="Remove task n: delete <n>.")
registry.register("find", cmd_find, help_text="Search descriptions: find <keyword>.")
registry.register(
    "postpone",
    cmd_postpone,
    help_text="Move a deadline or event: postpone <n> <d/M/yyyy HHmm>.",
)
