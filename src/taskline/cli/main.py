# src/taskline/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the task list, then runs the console REPL until
the exit keyword. A task file that cannot be read or written stops the
process with exit status 1.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import SEPARATOR, run_console_loop
from ..core.errors import StorageIOError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _fail(e: StorageIOError) -> int:
    logger.error("Fatal storage error: %s", e.message, exc_info=e)
    print(f"Fatal: {e.message}", file=sys.stderr)
    return 1


def main() -> int:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state, report = create_initial_state(settings=settings)
    except StorageIOError as e:
        return _fail(e)

    print(f"Hello! I'm {settings.app_name}, your task tracker.")
    if report.tasks:
        print(f"{len(report.tasks)} task(s) loaded from previous session.")
    if report.skipped:
        print(
            f"Skipped {len(report.skipped)} unreadable record(s); "
            f"the original file was copied to {report.backup_path}."
        )
    print("What can I do for you? Type 'help' to list commands.")
    print(SEPARATOR)

    try:
        run_console_loop(state)
        state.task_store.save()
    except StorageIOError as e:
        return _fail(e)

    print("Bye. Hope to see you again soon!")
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
