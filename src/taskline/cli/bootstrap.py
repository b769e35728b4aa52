# src/taskline/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local directories exist,
- wires the task file and store into AppState,
- loads the previous session.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_codec import LoadReport, TaskFile
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> tuple[AppState, LoadReport]:
    """
    Create AppState from the provided settings and load saved tasks.

    If settings is None, falls back to get_settings().
    Raises StorageIOError when the task file cannot be read.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(TaskFile(settings.tasks_path))
    report = store.load()
    logger.info("Loaded %d task(s) from %s", len(report.tasks), settings.tasks_path)

    return AppState(settings=settings, task_store=store), report
