import threading

import pytest

from shiftdesk.config import get_settings
from shiftdesk.errors import BadRequestError
from shiftdesk.models import Shift, ShiftAssignment
from shiftdesk.schemas.shift import ShiftCreate
from shiftdesk.services.scheduling import SchedulingService

from .conftest import ACTOR_ID, SHIFT_DAY, RecordingSink


def new_service(session_factory):
    return SchedulingService(session_factory(), settings=get_settings(), events=RecordingSink())


def open_shift(service, max_employees):
    return service.create_shift(
        ShiftCreate(
            date=SHIFT_DAY,
            start_time="09:00",
            end_time="17:00",
            role="Picker",
            skills=["forklift"],
            location="Depot",
            max_employees=max_employees,
        ),
        ACTOR_ID,
    )


def test_stale_capacity_read_cannot_overfill(session_factory):
    first = new_service(session_factory)
    second = new_service(session_factory)
    try:
        shift_id = open_shift(first, max_employees=1).id
        assert first.get_shift(shift_id).assigned_count == 0

        second.assign_employee_to_shift(shift_id, 2, ACTOR_ID)

        with pytest.raises(BadRequestError, match="maximum capacity"):
            first.assign_employee_to_shift(shift_id, 3, ACTOR_ID)
    finally:
        first.db.close()
        second.db.close()

    with session_factory() as session:
        stored = session.get(Shift, shift_id)
        assert stored.assigned_count == 1
        assert stored.status == "FULL"
        assert session.query(ShiftAssignment).filter_by(shift_id=shift_id).count() == 1


def test_racing_assignments_respect_capacity(session_factory):
    setup = new_service(session_factory)
    shift_id = open_shift(setup, max_employees=2).id
    setup.db.close()

    contenders = 6
    barrier = threading.Barrier(contenders)
    outcomes = []
    lock = threading.Lock()

    def attempt(employee_id):
        service = new_service(session_factory)
        try:
            service.get_shift(shift_id)
            barrier.wait()
            try:
                service.assign_employee_to_shift(shift_id, employee_id, ACTOR_ID)
                result = "assigned"
            except BadRequestError as exc:
                result = exc.message
        finally:
            service.db.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(100 + i,)) for i in range(contenders)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert outcomes.count("assigned") == 2
    assert outcomes.count("Shift is at maximum capacity") == contenders - 2

    with session_factory() as session:
        stored = session.get(Shift, shift_id)
        assert stored.assigned_count == 2
        assert stored.status == "FULL"
        assert session.query(ShiftAssignment).filter_by(shift_id=shift_id).count() == 2
