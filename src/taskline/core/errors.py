# src/taskline/core/errors.py

"""
Error taxonomy.

Every error raised by the domain carries a short user-facing message; the
command interpreter renders it and keeps the session alive. StorageIOError is
the exception: it escapes the interpreter so the process can stop.
"""

from __future__ import annotations


class TaskLineError(Exception):
    """Base class for all taskline errors."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


# ---- command input ----


class InvalidFormatError(TaskLineError):
    default_message = "Invalid command format."


class InvalidDateTimeFormatError(TaskLineError):
    default_message = "Enter date and time in the format d/M/yyyy HHmm, e.g. 21/4/2024 1200."


class InvalidTaskNumberError(TaskLineError):
    default_message = "Specify a valid task number."


class IndexOutOfRangeError(TaskLineError):
    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        if size == 0:
            msg = f"There is no task {index}: your task list is empty."
        else:
            msg = f"There is no task {index}: pick a number between 1 and {size}."
        super().__init__(msg)


# ---- date ordering ----


class PastDueDateError(TaskLineError):
    default_message = "The due date must be in the future."


class PastStartError(TaskLineError):
    default_message = "Start time must be in the future."


class InvertedRangeError(TaskLineError):
    default_message = "Start time cannot be after end time."


class UnsupportedOperationError(TaskLineError):
    default_message = "This task does not support that operation."


# ---- persisted records ----


class RecordError(TaskLineError):
    """A persisted record could not be decoded."""


class UnknownTaskKindError(RecordError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Unknown task kind: {tag!r}")


class MalformedRecordError(RecordError):
    def __init__(self, record: str, reason: str = "too few fields") -> None:
        self.record = record
        self.reason = reason
        super().__init__(f"Malformed record ({reason}): {record!r}")


# ---- filesystem ----


class StorageIOError(TaskLineError):
    """Reading or writing the task file failed."""

    default_message = "Could not access the task file."
