"""Time-of-day helpers.

Shift times are stored as minutes since midnight; ``HH:mm`` strings only
exist at the API boundary.
"""

from __future__ import annotations

import re
from datetime import date

MINUTES_PER_DAY = 24 * 60
_HHMM_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


def parse_hhmm(value: str) -> int:
    match = _HHMM_PATTERN.fullmatch(value or "")
    if not match:
        raise ValueError("Time must be in HH:mm format")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError("Time must be in HH:mm format")
    return hours * 60 + minutes


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_overnight(start_minutes: int, end_minutes: int) -> bool:
    return end_minutes < start_minutes


def span(start_minutes: int, end_minutes: int) -> tuple[int, int]:
    """Half-open window on the start day; overnight ends spill past 24:00."""
    if is_overnight(start_minutes, end_minutes):
        return start_minutes, end_minutes + MINUTES_PER_DAY
    return start_minutes, end_minutes


def duration_minutes(start_minutes: int, end_minutes: int) -> int:
    start, end = span(start_minutes, end_minutes)
    return end - start


def windows_overlap(first: tuple[int, int], second: tuple[int, int]) -> bool:
    first_start, first_end = span(*first)
    second_start, second_end = span(*second)
    return first_start < second_end and second_start < first_end


def sunday_based_weekday(value: date) -> int:
    """0=Sunday .. 6=Saturday, the numbering templates use."""
    return (value.weekday() + 1) % 7
