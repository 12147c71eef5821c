"""Coverage and workload aggregation.

Callers load the shifts through the repositories; everything here is an
in-memory reduction over every shift they pass in, whatever its status.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from .. import clock
from ..schemas.analytics import CoverageStat, DateRange, WorkloadStat

STANDARD_WEEK_HOURS = 40.0


def coverage(target: date, shifts: Iterable) -> List[CoverageStat]:
    groups: dict[tuple[str, str, str], dict] = {}
    for shift in shifts:
        key = (shift.location, shift.team or "", shift.role)
        bucket = groups.setdefault(
            key,
            {"location": shift.location, "team": shift.team, "role": shift.role, "required": 0, "assigned": 0},
        )
        bucket["required"] += shift.min_employees or 1
        bucket["assigned"] += len(shift.assigned_employees)

    stats: List[CoverageStat] = []
    for key in sorted(groups):
        bucket = groups[key]
        required = bucket["required"]
        assigned = bucket["assigned"]
        percent = assigned * 100 / required if required > 0 else 0.0
        stats.append(
            CoverageStat(
                date=target,
                location=bucket["location"],
                team=bucket["team"],
                role=bucket["role"],
                required=required,
                assigned=assigned,
                coverage=percent,
                gaps=max(0, required - assigned),
                # Utilization mirrors coverage in this model.
                utilization=percent,
            )
        )
    return stats


def shift_hours(shift) -> float:
    return clock.duration_minutes(shift.start_minutes, shift.end_minutes) / 60


def workload(
    employee_id: int,
    shifts: Iterable,
    start: date,
    end: date,
    employee_name: str = "",
    week_hours: float = STANDARD_WEEK_HOURS,
) -> WorkloadStat:
    worked = [
        shift
        for shift in shifts
        if start <= shift.date <= end and employee_id in shift.assigned_employees
    ]
    if not worked:
        return WorkloadStat(
            employee_id=employee_id,
            employee_name=employee_name,
            date_range=DateRange(start=start, end=end),
            total_hours=0.0,
            total_shifts=0,
            average_hours_per_day=0.0,
            overtime_hours=0.0,
            utilization=0.0,
        )

    total_hours = sum(shift_hours(shift) for shift in worked)
    first = min(shift.date for shift in worked)
    last = max(shift.date for shift in worked)
    day_count = (last - first).days + 1
    return WorkloadStat(
        employee_id=employee_id,
        employee_name=employee_name,
        date_range=DateRange(start=first, end=last),
        total_hours=total_hours,
        total_shifts=len(worked),
        average_hours_per_day=total_hours / day_count,
        overtime_hours=max(0.0, total_hours - week_hours),
        utilization=total_hours * 100 / week_hours,
    )
