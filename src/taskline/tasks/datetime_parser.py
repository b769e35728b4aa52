# src/taskline/tasks/datetime_parser.py

"""
The one place where date text is turned into datetimes.

Input pattern is ``d/M/yyyy HHmm`` (``21/4/2024 1200``): day and month take one
or two digits, the time is always four digits, 24-hour clock, no seconds.
Commands and the task file both go through parse_datetime().
"""

from __future__ import annotations

import re
from datetime import datetime

from ..core.errors import InvalidDateTimeFormatError

# strptime would accept "1/1/2024 930" (H=9, M=30) and similar; keep the time strict.
_DATETIME_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4}) (\d{2})(\d{2})$", re.ASCII)

DISPLAY_FORMAT = "%b %d %Y %H:%M"


def parse_datetime(text: str) -> datetime:
    m = _DATETIME_RE.match(text.strip())
    if not m:
        raise InvalidDateTimeFormatError()

    day, month, year, hour, minute = (int(g) for g in m.groups())
    try:
        return datetime(year, month, day, hour, minute)
    except ValueError:
        # 31/2/2024, 2460, 0/1/2024 ...
        raise InvalidDateTimeFormatError() from None


def format_datetime(dt: datetime) -> str:
    """Inverse of parse_datetime()."""
    return f"{dt.day}/{dt.month}/{dt.year:04d} {dt.hour:02d}{dt.minute:02d}"


def format_display(dt: datetime) -> str:
    return dt.strftime(DISPLAY_FORMAT)
