from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from shiftdesk.services import analytics

MONDAY = date(2024, 1, 8)


def shift(day=MONDAY, start=540, end=1020, employees=(), status="OPEN", **overrides):
    fields = dict(
        date=day,
        start_minutes=start,
        end_minutes=end,
        assigned_employees=set(employees),
        status=status,
        location="Downtown",
        team="Front",
        role="Cashier",
        min_employees=1,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_half_staffed_shift():
    stats = analytics.coverage(MONDAY, [shift(employees={1}, min_employees=2)])

    assert len(stats) == 1
    stat = stats[0]
    assert (stat.required, stat.assigned, stat.gaps) == (2, 1, 1)
    assert stat.coverage == pytest.approx(50.0)
    assert stat.utilization == pytest.approx(50.0)


def test_over_staffing_reports_no_gap():
    stat = analytics.coverage(MONDAY, [shift(employees={1, 2})])[0]
    assert stat.coverage == pytest.approx(200.0)
    assert stat.gaps == 0


def test_cancelled_shifts_still_count_toward_coverage():
    stats = analytics.coverage(
        MONDAY,
        [shift(employees={1}), shift(status="CANCELLED", min_employees=3)],
    )
    assert [(s.required, s.assigned) for s in stats] == [(4, 1)]


def test_coverage_groups_by_location_team_and_role():
    stats = analytics.coverage(
        MONDAY,
        [
            shift(role="Stocker", employees={1}),
            shift(role="Cashier", min_employees=2, employees={2}),
            shift(role="Cashier", employees={3}),
            shift(location="Airport", team=None, employees=()),
        ],
    )

    keys = [(s.location, s.team, s.role) for s in stats]
    assert keys == [
        ("Airport", None, "Cashier"),
        ("Downtown", "Front", "Cashier"),
        ("Downtown", "Front", "Stocker"),
    ]
    assert (stats[1].required, stats[1].assigned) == (3, 2)
    assert stats[0].coverage == 0.0


def test_forty_hour_week():
    week = [shift(day=MONDAY + timedelta(days=i), employees={7}) for i in range(5)]
    stat = analytics.workload(7, week, MONDAY, MONDAY + timedelta(days=6), employee_name="Dana Reyes")

    assert stat.total_hours == pytest.approx(40.0)
    assert stat.total_shifts == 5
    assert stat.overtime_hours == 0.0
    assert stat.utilization == pytest.approx(100.0)
    assert stat.average_hours_per_day == pytest.approx(8.0)
    assert stat.date_range.start == MONDAY
    assert stat.date_range.end == MONDAY + timedelta(days=4)
    assert stat.employee_name == "Dana Reyes"


def test_overtime_beyond_the_standard_week():
    week = [shift(day=MONDAY + timedelta(days=i), employees={7}) for i in range(6)]
    stat = analytics.workload(7, week, MONDAY, MONDAY + timedelta(days=6))

    assert stat.total_hours == pytest.approx(48.0)
    assert stat.overtime_hours == pytest.approx(8.0)
    assert stat.utilization == pytest.approx(120.0)


def test_overnight_shift_hours():
    assert analytics.shift_hours(shift(start=22 * 60, end=6 * 60)) == pytest.approx(8.0)


def test_no_shifts_returns_zeroes_over_requested_range():
    end = MONDAY + timedelta(days=6)
    stat = analytics.workload(7, [shift(employees={8})], MONDAY, end)

    assert stat.total_hours == 0.0
    assert stat.total_shifts == 0
    assert stat.average_hours_per_day == 0.0
    assert (stat.date_range.start, stat.date_range.end) == (MONDAY, end)


def test_workload_counts_cancelled_but_not_out_of_range_shifts():
    shifts = [
        shift(employees={7}),
        shift(employees={7}, status="CANCELLED", start=1080, end=1200),
        shift(day=MONDAY + timedelta(days=30), employees={7}),
    ]
    stat = analytics.workload(7, shifts, MONDAY, MONDAY + timedelta(days=6))
    assert stat.total_shifts == 2
    assert stat.total_hours == pytest.approx(10.0)
