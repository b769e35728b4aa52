# tests/test_main.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from taskline.cli import main as cli_main

from .fakes import scripted_input


def feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    monkeypatch.setattr("builtins.input", scripted_input(lines))


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    # setup_logging() rewires the root logger; keep pytest's handlers intact.
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)


def test_session_round_trip(
    settings: SimpleNamespace,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    feed(monkeypatch, ["todo read book", "mark 1", "bye"])
    assert cli_main.main() == 0
    assert settings.tasks_path.read_text("utf-8") == "T | 1 | read book\n"

    feed(monkeypatch, ["list", "bye"])
    assert cli_main.main() == 0
    out = capsys.readouterr().out
    assert "1 task(s) loaded from previous session." in out
    assert "1. [T][X] read book" in out


def test_skipped_records_are_announced(
    settings: SimpleNamespace,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("T | 0 | ok\nZ | 0 | broken\n", "utf-8")
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    feed(monkeypatch, ["bye"])

    assert cli_main.main() == 0

    out = capsys.readouterr().out
    assert "Skipped 1 unreadable record(s)" in out
    assert "tasks.txt.bak" in out
    # The next save drops the bad line; the backup still has it.
    assert settings.tasks_path.read_text("utf-8") == "T | 0 | ok\n"


def test_unreadable_task_file_aborts(
    settings: SimpleNamespace,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    settings.tasks_path.mkdir(parents=True)  # a directory where the file should be
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    assert cli_main.main() == 1
    assert "Fatal: Error loading tasks" in capsys.readouterr().err
