# tests/test_task_store.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from taskline.core.errors import (
    IndexOutOfRangeError,
    InvalidDateTimeFormatError,
    StorageIOError,
    UnsupportedOperationError,
)
from taskline.tasks.task_codec import TaskFile
from taskline.tasks.task_models import Deadline, Event, Todo
from taskline.tasks.task_store import TaskStore

from .fakes import FakeTaskFile


def _three(store: TaskStore) -> None:
    store.add(Todo(description="alpha"))
    store.add(Todo(description="Beta release"))
    store.add(Deadline(description="gamma", by=datetime(2025, 1, 1, 12, 0)))


def test_add_returns_count_and_persists(fake_store: TaskStore, fake_file: FakeTaskFile) -> None:
    assert fake_store.add(Todo(description="read book")) == 1
    assert fake_store.add(Todo(description="write notes")) == 2
    assert len(fake_file.saves) == 2
    assert fake_file.last_saved == ["T | 0 | read book", "T | 0 | write notes"]


def test_load_replaces_collection() -> None:
    repo = FakeTaskFile([Todo(description="from disk")])
    store = TaskStore(repo)
    store.add(Todo(description="in memory"))
    report = store.load()
    assert [t.description for t in store.list_tasks()] == ["from disk"]
    assert report.skipped == []


def test_list_is_a_read_only_view(fake_store: TaskStore) -> None:
    _three(fake_store)
    view = fake_store.list_tasks()
    assert isinstance(view, tuple)
    assert [t.description for t in view] == ["alpha", "Beta release", "gamma"]


def test_delete_shifts_later_tasks(fake_store: TaskStore, fake_file: FakeTaskFile) -> None:
    _three(fake_store)
    before = fake_store.list_tasks()

    removed, count = fake_store.delete(2)

    assert removed is before[1]
    assert count == 2
    assert fake_store.list_tasks() == (before[0], before[2])
    assert fake_file.last_saved == ["T | 0 | alpha", "D | 0 | gamma | 1/1/2025 1200"]


@pytest.mark.parametrize("index", [0, 4, -1])
def test_delete_out_of_range(fake_store: TaskStore, fake_file: FakeTaskFile, index: int) -> None:
    _three(fake_store)
    saves = len(fake_file.saves)
    with pytest.raises(IndexOutOfRangeError):
        fake_store.delete(index)
    assert len(fake_store) == 3
    assert len(fake_file.saves) == saves


def test_set_done_is_idempotent(fake_store: TaskStore, fake_file: FakeTaskFile) -> None:
    _three(fake_store)
    saves = len(fake_file.saves)

    task, changed = fake_store.set_done(1, True)
    assert changed is True
    assert task.done is True
    assert len(fake_file.saves) == saves + 1

    task, changed = fake_store.set_done(1, True)
    assert changed is False
    assert task.done is True
    assert len(fake_file.saves) == saves + 1

    _, changed = fake_store.set_done(1, False)
    assert changed is True
    assert fake_store.get(1).done is False


def test_set_done_out_of_range_leaves_store_unchanged(fake_store: TaskStore) -> None:
    fake_store.add(Todo(description="one"))
    fake_store.add(Todo(description="two"))
    with pytest.raises(IndexOutOfRangeError) as exc:
        fake_store.set_done(5, True)
    assert exc.value.size == 2
    assert [t.done for t in fake_store.list_tasks()] == [False, False]


def test_reschedule_deadline(fake_store: TaskStore, fake_file: FakeTaskFile) -> None:
    _three(fake_store)
    task = fake_store.reschedule(3, datetime(2025, 3, 4, 5, 6))
    assert task.by == datetime(2025, 3, 4, 5, 6)  # type: ignore[attr-defined]
    assert fake_file.last_saved[-1] == "D | 0 | gamma | 4/3/2025 0506"


def test_reschedule_event_keeps_duration(fake_store: TaskStore) -> None:
    fake_store.add(
        Event(
            description="sync",
            start=datetime(2025, 1, 1, 10, 0),
            end=datetime(2025, 1, 1, 11, 30),
        )
    )
    task = fake_store.reschedule(1, datetime(2025, 2, 1, 15, 0))
    assert isinstance(task, Event)
    assert task.start == datetime(2025, 2, 1, 15, 0)
    assert task.end == datetime(2025, 2, 1, 16, 30)


def test_reschedule_todo_is_unsupported(fake_store: TaskStore, fake_file: FakeTaskFile) -> None:
    _three(fake_store)
    saves = len(fake_file.saves)
    with pytest.raises(UnsupportedOperationError):
        fake_store.reschedule(1, datetime(2025, 1, 1))
    assert len(fake_file.saves) == saves


def test_reschedule_out_of_range(fake_store: TaskStore) -> None:
    with pytest.raises(IndexOutOfRangeError):
        fake_store.reschedule(1, datetime(2025, 1, 1))


def test_find_by_keyword(fake_store: TaskStore, fake_file: FakeTaskFile) -> None:
    _three(fake_store)
    saves = len(fake_file.saves)

    assert [t.description for t in fake_store.find_by_keyword("BETA")] == ["Beta release"]
    assert [t.description for t in fake_store.find_by_keyword("a")] == [
        "alpha",
        "Beta release",
        "gamma",
    ]
    # Dates are not searched.
    assert fake_store.find_by_keyword("2025") == []
    assert len(fake_file.saves) == saves


def test_failed_write_keeps_memory_change() -> None:
    repo = FakeTaskFile(fail_on_save=True)
    store = TaskStore(repo)
    with pytest.raises(StorageIOError):
        store.add(Todo(description="unsaved"))
    assert [t.description for t in store.list_tasks()] == ["unsaved"]


def test_event_reschedule_overflow_leaves_event_untouched(
    fake_store: TaskStore, fake_file: FakeTaskFile
) -> None:
    start, end = datetime(2030, 1, 1, 10, 0), datetime(2030, 1, 1, 12, 0)
    fake_store.add(Event(description="sync", start=start, end=end))
    saves = len(fake_file.saves)

    with pytest.raises(InvalidDateTimeFormatError):
        fake_store.reschedule(1, datetime(9999, 12, 31, 23, 0))

    task = fake_store.get(1)
    assert (task.start, task.end) == (start, end)  # type: ignore[attr-defined]
    assert len(fake_file.saves) == saves


def test_rescheduled_early_year_survives_reload(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore(TaskFile(path))
    store.load()
    store.add(Deadline(description="x", by=datetime(2030, 1, 1, 12, 0)))
    store.add(
        Event(description="y", start=datetime(2030, 1, 1, 10, 0), end=datetime(2030, 1, 1, 11, 0))
    )

    store.reschedule(1, datetime(999, 1, 1, 12, 0))
    store.reschedule(2, datetime(5, 6, 7, 8, 9))

    reloaded = TaskStore(TaskFile(path))
    report = reloaded.load()
    assert report.skipped == []
    assert report.backup_path is None
    assert reloaded.list_tasks() == store.list_tasks()
