from datetime import date

from shiftdesk.services import conflicts
from shiftdesk.services.conflicts import LeaveWindow, ShiftSlot

DAY = date(2024, 3, 4)


def slot(shift_id, start, end, day=DAY):
    return ShiftSlot(shift_id=shift_id, date=day, start_minutes=start, end_minutes=end)


def test_overlapping_candidate_is_a_double_booking():
    existing = [slot(1, 540, 1020)]
    found = conflicts.detect(5, existing, [], candidate=slot(2, 720, 1200))

    assert len(found) == 1
    assert found[0].type == conflicts.DOUBLE_BOOKING
    assert found[0].severity == conflicts.SEVERITY_HIGH
    assert found[0].shift_id == 2
    assert "shift #1 on 2024-03-04 09:00-17:00" in found[0].description


def test_back_to_back_shifts_do_not_conflict():
    assert conflicts.detect(5, [slot(1, 540, 1020)], [], candidate=slot(2, 1020, 1260)) == []


def test_shifts_on_different_dates_never_conflict():
    overnight = slot(1, 1320, 360, day=DAY)
    early_next_day = slot(2, 120, 480, day=date(2024, 3, 5))
    assert conflicts.detect(5, [overnight], [], candidate=early_next_day) == []


def test_candidate_is_not_compared_with_itself():
    existing = [slot(1, 540, 1020)]
    assert conflicts.detect(5, existing, [], candidate=slot(1, 540, 1020)) == []


def test_whole_day_leave_covers_any_shift_in_range():
    leave = LeaveWindow(request_id=9, start_date=date(2024, 3, 1), end_date=date(2024, 3, 10))
    found = conflicts.detect(5, [], [leave], candidate=slot(3, 540, 1020))

    assert [c.type for c in found] == [conflicts.TIME_OFF_CLASH]
    assert found[0].severity == conflicts.SEVERITY_MEDIUM
    assert found[0].description == "Conflicts with approved time-off from 2024-03-01 to 2024-03-10"


def test_leave_outside_the_date_range_is_ignored():
    leave = LeaveWindow(request_id=9, start_date=date(2024, 3, 5), end_date=date(2024, 3, 6))
    assert conflicts.detect(5, [], [leave], candidate=slot(3, 540, 1020)) == []


def test_partial_day_leave_only_clashes_when_hours_overlap():
    leave = LeaveWindow(request_id=9, start_date=DAY, end_date=DAY, start_minutes=720, end_minutes=840)

    assert conflicts.detect(5, [], [leave], candidate=slot(3, 480, 720)) == []
    found = conflicts.detect(5, [], [leave], candidate=slot(4, 540, 1020))
    assert len(found) == 1
    assert found[0].description.endswith("(12:00-14:00)")


def test_audit_reports_each_overlapping_pair_once():
    shifts = [slot(1, 540, 1020), slot(2, 600, 900), slot(3, 660, 960)]
    found = conflicts.detect(5, shifts, [])

    assert len(found) == 3
    assert all(c.type == conflicts.DOUBLE_BOOKING for c in found)


def test_audit_checks_every_shift_against_leave():
    shifts = [slot(1, 540, 1020), slot(2, 540, 1020, day=date(2024, 3, 9))]
    leave = LeaveWindow(request_id=9, start_date=DAY, end_date=DAY)

    found = conflicts.detect(5, shifts, [leave])

    assert [(c.type, c.shift_id) for c in found] == [(conflicts.TIME_OFF_CLASH, 1)]
