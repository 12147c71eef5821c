"""Seed a week of demo shifts plus a recurring template into the configured database."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from shiftdesk.db import SessionLocal  # noqa: E402
from shiftdesk.models import RecurringShiftTemplate  # noqa: E402
from shiftdesk.schemas.template import TemplateCreate  # noqa: E402
from shiftdesk.services.directory import EmployeeDirectory  # noqa: E402
from shiftdesk.services.scheduling import SchedulingService  # noqa: E402

SEED_ACTOR_ID = 1
DEMO_EMPLOYEES = {101: "Avery Chen", 102: "Jordan Okafor", 103: "Riley Santos"}

TEMPLATES = (
    TemplateCreate(
        name="Weekday front desk",
        day_of_week=1,
        start_time="09:00",
        end_time="17:00",
        role="Receptionist",
        skills=["customer-service"],
        location="Main Office",
        team="Front Desk",
        min_employees=1,
        max_employees=2,
    ),
    TemplateCreate(
        name="Night security",
        day_of_week=5,
        start_time="22:00",
        end_time="06:00",
        role="Guard",
        skills=["security", "first-aid"],
        location="Warehouse",
        min_employees=1,
        max_employees=1,
    ),
)


def ensure_template(service: SchedulingService, payload: TemplateCreate) -> RecurringShiftTemplate:
    existing = (
        service.db.query(RecurringShiftTemplate)
        .filter(RecurringShiftTemplate.name == payload.name)
        .one_or_none()
    )
    if existing:
        return existing
    return service.create_recurring_template(payload, SEED_ACTOR_ID)


def main() -> None:
    session = SessionLocal()
    try:
        directory = EmployeeDirectory()
        for employee_id, name in DEMO_EMPLOYEES.items():
            directory.register(employee_id, name)
        service = SchedulingService(session, directory=directory)
        start = date.today()
        end = start + timedelta(days=13)
        generated = []
        for payload in TEMPLATES:
            template = ensure_template(service, payload)
            generated.extend(service.generate_shifts_from_template(template.id, start, end, SEED_ACTOR_ID))

        for shift, employee_id in zip(generated, DEMO_EMPLOYEES):
            service.assign_employee_to_shift(shift.id, employee_id, SEED_ACTOR_ID)

        print("Demo data ready:")
        print(f"  {len(generated)} shift(s) between {start.isoformat()} and {end.isoformat()}")
        for employee_id in DEMO_EMPLOYEES:
            workload = service.get_workload(employee_id, start, end)
            print(f"  {workload.employee_name}: {workload.total_hours:.1f}h over {workload.total_shifts} shift(s)")
    finally:
        session.close()


if __name__ == "__main__":
    main()
