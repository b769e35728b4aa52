# src/taskline/tasks/task_codec.py

"""
Line-oriented task file.

One record per line, fields separated by " | ":

    T | 1 | read book
    D | 0 | submit report | 21/4/2024 1200
    E | 1 | team sync | 21/4/2024 1200 - 21/4/2024 1300

Loading is tolerant: a record that cannot be decoded is skipped and reported,
and the original file is copied to <name>.bak so the next save cannot lose it.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import (
    MalformedRecordError,
    StorageIOError,
    TaskLineError,
    UnknownTaskKindError,
)
from .datetime_parser import format_datetime, parse_datetime
from .task_models import TASK_TYPES, Task, TaskKind

logger = logging.getLogger(__name__)

FIELD_SEP = " | "
RANGE_SEP = " - "


def encode_task(task: Task) -> str:
    fields = [task.kind.value, "1" if task.done else "0", task.description]
    dates = task.date_values()
    if dates:
        fields.append(RANGE_SEP.join(format_datetime(d) for d in dates))
    return FIELD_SEP.join(fields)


def decode_task(record: str) -> Task:
    fields = record.split(FIELD_SEP)
    if len(fields) < 3:
        raise MalformedRecordError(record)

    try:
        kind = TaskKind(fields[0].strip())
    except ValueError:
        raise UnknownTaskKindError(fields[0].strip()) from None
    task_type = TASK_TYPES[kind]

    done_raw = fields[1].strip()
    if done_raw not in ("0", "1"):
        raise MalformedRecordError(record, f"done flag must be 0 or 1, got {done_raw!r}")

    # A description may itself contain " | ": everything between the flag and
    # the dates field belongs to it.
    if task_type.date_count:
        if len(fields) < 4:
            raise MalformedRecordError(record)
        description = FIELD_SEP.join(fields[2:-1])
        date_texts = fields[-1].split(RANGE_SEP)
        if len(date_texts) != task_type.date_count:
            raise MalformedRecordError(record, "wrong number of dates")
    else:
        description = FIELD_SEP.join(fields[2:])
        date_texts = []

    if not description.strip():
        raise MalformedRecordError(record, "empty description")

    dates = [parse_datetime(t) for t in date_texts]
    kwargs: dict[str, object] = {"description": description, "done": done_raw == "1"}
    if kind is TaskKind.DEADLINE:
        kwargs["by"] = dates[0]
    elif kind is TaskKind.EVENT:
        kwargs["start"], kwargs["end"] = dates
    return task_type(**kwargs)  # type: ignore[arg-type]


@dataclass(slots=True)
class SkippedRecord:
    line_no: int
    record: str
    reason: str


@dataclass(slots=True)
class LoadReport:
    tasks: list[Task] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)
    # Set when skipped records made us copy the original file aside.
    backup_path: Path | None = None


class TaskFile:
    """Whole-file load/save of the task list (last write wins)."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return self._path.with_name(self._path.name + ".bak")

    def load(self) -> LoadReport:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch(exist_ok=True)
            text = self._path.read_text("utf-8")
        except OSError as e:
            raise StorageIOError(f"Error loading tasks from {self._path}: {e}") from e

        report = LoadReport()
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                report.tasks.append(decode_task(line))
            except TaskLineError as e:
                logger.warning("Skipping record %s:%d: %s", self._path, line_no, e)
                report.skipped.append(SkippedRecord(line_no=line_no, record=line, reason=str(e)))

        if report.skipped:
            report.backup_path = self._backup()
        logger.debug(
            "Loaded %d task(s) from %s (skipped=%d)",
            len(report.tasks),
            self._path,
            len(report.skipped),
        )
        return report

    def save(self, tasks: Iterable[Task]) -> None:
        lines = [encode_task(t) for t in tasks]
        payload = "".join(line + "\n" for line in lines)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_name(self._path.name + ".tmp")
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageIOError(f"Error saving tasks to {self._path}: {e}") from e
        logger.debug("Saved %d task(s) to %s", len(lines), self._path)

    def _backup(self) -> Path:
        try:
            shutil.copyfile(self._path, self.backup_path)
        except OSError as e:
            raise StorageIOError(f"Error backing up {self._path}: {e}") from e
        logger.warning("Corrupt records found; original file copied to %s", self.backup_path)
        return self.backup_path
