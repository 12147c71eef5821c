"""Scheduling conflict detection.

Pure functions over snapshots of an employee's shifts and approved
time-off. Nothing here touches the database; the scheduling service loads
the rows and hands them over as :class:`ShiftSlot` / :class:`LeaveWindow`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from itertools import combinations
from typing import List, Optional, Sequence

from .. import clock

DOUBLE_BOOKING = "DOUBLE_BOOKING"
TIME_OFF_CLASH = "TIME_OFF_CLASH"

SEVERITY_HIGH = "HIGH"
SEVERITY_MEDIUM = "MEDIUM"


@dataclass(frozen=True)
class ShiftSlot:
    shift_id: int
    date: date
    start_minutes: int
    end_minutes: int

    @property
    def window(self) -> tuple[int, int]:
        return self.start_minutes, self.end_minutes

    def label(self) -> str:
        return (
            f"shift #{self.shift_id} on {self.date.isoformat()} "
            f"{clock.format_hhmm(self.start_minutes)}-{clock.format_hhmm(self.end_minutes)}"
        )


@dataclass(frozen=True)
class LeaveWindow:
    request_id: int
    start_date: date
    end_date: date
    start_minutes: Optional[int] = None
    end_minutes: Optional[int] = None

    @property
    def is_partial_day(self) -> bool:
        return self.start_minutes is not None and self.end_minutes is not None

    def covers(self, slot: ShiftSlot) -> bool:
        if not self.start_date <= slot.date <= self.end_date:
            return False
        if not self.is_partial_day:
            return True
        return clock.windows_overlap((self.start_minutes, self.end_minutes), slot.window)


@dataclass(frozen=True)
class Conflict:
    type: str
    employee_id: int
    shift_id: int
    description: str
    severity: str


def slot_for(shift) -> ShiftSlot:
    return ShiftSlot(
        shift_id=shift.id,
        date=shift.date,
        start_minutes=shift.start_minutes,
        end_minutes=shift.end_minutes,
    )


def leave_for(request) -> LeaveWindow:
    return LeaveWindow(
        request_id=request.id,
        start_date=request.start_date,
        end_date=request.end_date,
        start_minutes=request.start_minutes,
        end_minutes=request.end_minutes,
    )


def shifts_overlap(first: ShiftSlot, second: ShiftSlot) -> bool:
    # Same-day comparison only; an overnight shift does not see the next day's early shift.
    if first.date != second.date:
        return False
    return clock.windows_overlap(first.window, second.window)


def detect(
    employee_id: int,
    shifts: Sequence[ShiftSlot],
    leaves: Sequence[LeaveWindow],
    candidate: Optional[ShiftSlot] = None,
) -> List[Conflict]:
    """Return the conflicts for ``employee_id``.

    With a ``candidate`` only the candidate is checked: against every other
    assigned shift and every approved leave. Without one the whole assigned
    set is audited, each overlapping pair reported once.
    """
    if candidate is not None:
        others = [slot for slot in shifts if slot.shift_id != candidate.shift_id]
        conflicts = [
            _double_booking(employee_id, candidate, other)
            for other in others
            if shifts_overlap(candidate, other)
        ]
        conflicts.extend(_time_off_clash(employee_id, candidate, leave) for leave in leaves if leave.covers(candidate))
        return conflicts

    conflicts = [
        _double_booking(employee_id, first, second)
        for first, second in combinations(shifts, 2)
        if shifts_overlap(first, second)
    ]
    for slot in shifts:
        conflicts.extend(_time_off_clash(employee_id, slot, leave) for leave in leaves if leave.covers(slot))
    return conflicts


def _double_booking(employee_id: int, slot: ShiftSlot, other: ShiftSlot) -> Conflict:
    return Conflict(
        type=DOUBLE_BOOKING,
        employee_id=employee_id,
        shift_id=slot.shift_id,
        description=f"Double booking with {other.label()}",
        severity=SEVERITY_HIGH,
    )


def _time_off_clash(employee_id: int, slot: ShiftSlot, leave: LeaveWindow) -> Conflict:
    period = f"{leave.start_date.isoformat()} to {leave.end_date.isoformat()}"
    if leave.is_partial_day:
        period += f" ({clock.format_hhmm(leave.start_minutes)}-{clock.format_hhmm(leave.end_minutes)})"
    return Conflict(
        type=TIME_OFF_CLASH,
        employee_id=employee_id,
        shift_id=slot.shift_id,
        description=f"Conflicts with approved time-off from {period}",
        severity=SEVERITY_MEDIUM,
    )
