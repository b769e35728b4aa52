# src/taskline/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test stand-in with the same attributes).
    settings: Any
    task_store: TaskStore

    # Source of "now" for date validation; tests pin it.
    clock: Callable[[], datetime] = field(default=datetime.now)
