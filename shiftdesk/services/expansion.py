"""Recurring template expansion into concrete shift drafts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, List, Optional, Tuple

from .. import clock


@dataclass(frozen=True)
class ShiftDraft:
    date: date
    start_minutes: int
    end_minutes: int
    is_overnight: bool
    role: str
    required_skills: Tuple[str, ...]
    location: str
    team: Optional[str]
    min_employees: int
    max_employees: Optional[int]
    status: str = "OPEN"


def matching_dates(day_of_week: int, start: date, end: date) -> Iterator[date]:
    """Yield every date in ``[start, end]`` falling on ``day_of_week`` (0=Sunday)."""
    delta = (day_of_week - clock.sunday_based_weekday(start)) % 7
    candidate = start + timedelta(days=delta)
    while candidate <= end:
        yield candidate
        candidate += timedelta(days=7)


def expand(template, start: date, end: date) -> List[ShiftDraft]:
    overnight = clock.is_overnight(template.start_minutes, template.end_minutes)
    skills = tuple(template.required_skills or ())
    return [
        ShiftDraft(
            date=day,
            start_minutes=template.start_minutes,
            end_minutes=template.end_minutes,
            is_overnight=overnight,
            role=template.role,
            required_skills=skills,
            location=template.location,
            team=template.team,
            min_employees=template.min_employees or 1,
            max_employees=template.max_employees,
        )
        for day in matching_dates(template.day_of_week, start, end)
    ]
