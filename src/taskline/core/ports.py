# src/taskline/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on a Protocol instead of the concrete file codec,
so tests can swap in an in-memory fake.
"""

from typing import Iterable, Protocol

from ..tasks.task_codec import LoadReport
from ..tasks.task_models import Task


class TaskFileRepo(Protocol):
    """Whole-collection persistence: read everything, write everything."""

    def load(self) -> LoadReport: ...
    def save(self, tasks: Iterable[Task]) -> None: ...
