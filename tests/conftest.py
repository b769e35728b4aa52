# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskline.core.state import AppState
from taskline.tasks.task_codec import TaskFile
from taskline.tasks.task_store import TaskStore

from .fakes import FakeTaskFile

# Every date-validation test runs "at" this instant.
FIXED_NOW = datetime(2024, 1, 1, 9, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="taskline-test",
        log_level="WARNING",
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.txt",
        log_dir=data_dir,
    )


@pytest.fixture()
def task_file(settings: SimpleNamespace) -> TaskFile:
    return TaskFile(settings.tasks_path)


@pytest.fixture()
def store(task_file: TaskFile) -> TaskStore:
    """Real file-backed store (the file round-trip is part of what we test)."""
    s = TaskStore(task_file)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store, clock=lambda: FIXED_NOW)


@pytest.fixture()
def fake_file() -> FakeTaskFile:
    return FakeTaskFile()


@pytest.fixture()
def fake_store(fake_file: FakeTaskFile) -> TaskStore:
    s = TaskStore(fake_file)
    s.load()
    return s
