# src/taskline/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

from ..core.errors import (
    InvalidDateTimeFormatError,
    InvalidFormatError,
    InvertedRangeError,
    PastDueDateError,
    PastStartError,
    UnsupportedOperationError,
)
from .datetime_parser import format_display, parse_datetime

BY_MARKER = "/by"
FROM_MARKER = "/from"
TO_MARKER = "/to"

TODO_USAGE = "todo <description>"
DEADLINE_USAGE = "deadline <description> /by <d/M/yyyy HHmm>"
EVENT_USAGE = "event <description> /from <d/M/yyyy HHmm> /to <d/M/yyyy HHmm>"


class TaskKind(StrEnum):
    """Closed set of task variants; the value doubles as the record tag."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def _strip_keyword(line: str) -> str:
    """Drop the leading command word ("todo", "deadline", ...)."""
    parts = line.strip().split(None, 1)
    return parts[1] if len(parts) == 2 else ""


def _usage_error(usage: str) -> InvalidFormatError:
    return InvalidFormatError(f"Enter it as: {usage}")


@dataclass(slots=True, kw_only=True)
class Task:
    """
    Common part of every task.

    Variants declare:
    - kind: record tag
    - date_count: number of datetimes they carry (0, 1 or 2)
    and implement date_values()/reschedule() for it.
    """

    kind: ClassVar[TaskKind]
    date_count: ClassVar[int] = 0

    description: str
    done: bool = False

    @property
    def has_dates(self) -> bool:
        return self.date_count > 0

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def date_values(self) -> tuple[datetime, ...]:
        return ()

    def reschedule(self, new_start: datetime) -> None:
        raise UnsupportedOperationError(
            f"Task '{self.description}' has no date to postpone."
        )

    def _details(self) -> str:
        return ""

    def __str__(self) -> str:
        return f"[{self.kind}][{self.status_icon}] {self.description}{self._details()}"


@dataclass(slots=True, kw_only=True)
class Todo(Task):
    kind: ClassVar[TaskKind] = TaskKind.TODO

    @classmethod
    def from_command(cls, line: str, *, now: datetime | None = None) -> Todo:
        description = _strip_keyword(line).strip()
        if not description:
            raise _usage_error(TODO_USAGE)
        return cls(description=description)


@dataclass(slots=True, kw_only=True)
class Deadline(Task):
    kind: ClassVar[TaskKind] = TaskKind.DEADLINE
    date_count: ClassVar[int] = 1

    by: datetime

    @classmethod
    def from_command(cls, line: str, *, now: datetime | None = None) -> Deadline:
        body = _strip_keyword(line)
        by_idx = body.find(BY_MARKER)
        if by_idx == -1:
            raise _usage_error(DEADLINE_USAGE)

        description = body[:by_idx].strip()
        by_text = body[by_idx + len(BY_MARKER) :].strip()
        if not description or not by_text:
            raise _usage_error(DEADLINE_USAGE)

        by = parse_datetime(by_text)
        now = now or datetime.now()
        if by <= now:
            raise PastDueDateError()
        return cls(description=description, by=by)

    def date_values(self) -> tuple[datetime, ...]:
        return (self.by,)

    def reschedule(self, new_start: datetime) -> None:
        self.by = new_start

    def _details(self) -> str:
        return f" (by: {format_display(self.by)})"


@dataclass(slots=True, kw_only=True)
class Event(Task):
    kind: ClassVar[TaskKind] = TaskKind.EVENT
    date_count: ClassVar[int] = 2

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvertedRangeError()

    @classmethod
    def from_command(cls, line: str, *, now: datetime | None = None) -> Event:
        body = _strip_keyword(line)
        from_idx = body.find(FROM_MARKER)
        to_idx = body.find(TO_MARKER, from_idx + len(FROM_MARKER)) if from_idx != -1 else -1
        if from_idx == -1 or to_idx == -1:
            raise _usage_error(EVENT_USAGE)

        description = body[:from_idx].strip()
        start_text = body[from_idx + len(FROM_MARKER) : to_idx].strip()
        end_text = body[to_idx + len(TO_MARKER) :].strip()
        if not description or not start_text or not end_text:
            raise _usage_error(EVENT_USAGE)

        event = cls(
            description=description,
            start=parse_datetime(start_text),
            end=parse_datetime(end_text),
        )
        now = now or datetime.now()
        if event.start <= now:
            raise PastStartError()
        return event

    def date_values(self) -> tuple[datetime, ...]:
        return (self.start, self.end)

    def reschedule(self, new_start: datetime) -> None:
        # Keep the event length; only move it.
        duration = self.end - self.start
        try:
            new_end = new_start + duration
        except OverflowError:
            raise InvalidDateTimeFormatError(
                "The event would end past the last supported date."
            ) from None
        self.start = new_start
        self.end = new_end

    def _details(self) -> str:
        return f" (from: {format_display(self.start)} to: {format_display(self.end)})"


TASK_TYPES: dict[TaskKind, type[Task]] = {
    TaskKind.TODO: Todo,
    TaskKind.DEADLINE: Deadline,
    TaskKind.EVENT: Event,
}
