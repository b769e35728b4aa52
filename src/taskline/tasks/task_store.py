# src/taskline/tasks/task_store.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.errors import IndexOutOfRangeError
from ..core.ports import TaskFileRepo
from .task_codec import LoadReport
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory ordered task list backed by a TaskFileRepo.

    Addressing is positional and 1-based; a task has no identity beyond its
    current position. Every mutation rewrites the whole file before returning.
    If that write fails the in-memory change stays and StorageIOError is raised.
    """

    def __init__(self, repo: TaskFileRepo) -> None:
        self._repo = repo
        self._tasks: list[Task] = []

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    def load(self) -> LoadReport:
        report = self._repo.load()
        self._tasks = list(report.tasks)
        logger.info("TaskStore ready total=%s skipped=%s", len(self._tasks), len(report.skipped))
        return report

    def save(self) -> None:
        self._repo.save(self._tasks)

    # ---- helpers ----

    def _check_index(self, index: int) -> int:
        if not 1 <= index <= len(self._tasks):
            raise IndexOutOfRangeError(index, len(self._tasks))
        return index - 1

    def get(self, index: int) -> Task:
        return self._tasks[self._check_index(index)]

    # ---- public API ----

    def add(self, task: Task) -> int:
        self._tasks.append(task)
        self.save()
        logger.debug("Task added kind=%s count=%d", task.kind, len(self._tasks))
        return len(self._tasks)

    def list_tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def delete(self, index: int) -> tuple[Task, int]:
        removed = self._tasks.pop(self._check_index(index))
        self.save()
        logger.debug("Task deleted index=%d count=%d", index, len(self._tasks))
        return removed, len(self._tasks)

    def set_done(self, index: int, done: bool) -> tuple[Task, bool]:
        """
        Set the completion flag of task `index`.

        Returns (task, changed). changed is False when the task was already in
        the requested state; nothing is written in that case.
        """
        task = self.get(index)
        if task.done == done:
            return task, False
        task.done = done
        self.save()
        logger.debug("Task index=%d done=%s", index, done)
        return task, True

    def reschedule(self, index: int, new_start: datetime) -> Task:
        task = self.get(index)
        task.reschedule(new_start)
        self.save()
        logger.debug("Task rescheduled index=%d new_start=%s", index, new_start)
        return task

    def find_by_keyword(self, keyword: str) -> list[Task]:
        needle = keyword.lower()
        return [t for t in self._tasks if needle in t.description.lower()]
