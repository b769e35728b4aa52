# src/taskline/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import is_exit_command
from ..cli.commands import registry as command_registry
from ..core.errors import StorageIOError
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "> "
SEPARATOR = "-" * 50


def run_console_loop(state: AppState) -> None:
    """
    Blocking read-eval loop: one line is fully handled (including the file
    write) before the next one is read.

    Ends on the exit keyword, EOF or Ctrl+C. StorageIOError is not caught here.
    """
    logger.info("Console connector started tasks=%d.", len(state.task_store))

    while True:
        try:
            user_input = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if is_exit_command(user_input):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except StorageIOError:
            raise
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        print(reply)
        print(SEPARATOR)

    logger.info("Console connector finished.")
