from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import and_, case, literal, or_, update
from sqlalchemy.orm import Session, selectinload

from ..models import Shift, ShiftAssignment
from ..models.shift import shift_status_enum


class ShiftRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, shift: Shift) -> Shift:
        self.db.add(shift)
        self.db.flush()
        return shift

    def add_all(self, shifts: List[Shift]) -> List[Shift]:
        self.db.add_all(shifts)
        self.db.flush()
        return shifts

    def get(self, shift_id: int) -> Optional[Shift]:
        return self.db.get(Shift, shift_id)

    def delete(self, shift: Shift) -> None:
        self.db.delete(shift)
        self.db.flush()

    def list_page(
        self,
        offset: int,
        limit: int,
        location: str | None = None,
        team: str | None = None,
        role: str | None = None,
        on_date: date | None = None,
    ) -> Tuple[List[Shift], int]:
        query = self.db.query(Shift)
        if location:
            query = query.filter(Shift.location == location)
        if team:
            query = query.filter(Shift.team == team)
        if role:
            query = query.filter(Shift.role == role)
        if on_date:
            query = query.filter(Shift.date == on_date)
        total = query.count()
        items = (
            query.options(selectinload(Shift.assignments))
            .order_by(Shift.created_at.desc(), Shift.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def on_date(self, target: date, location: str | None = None, team: str | None = None) -> List[Shift]:
        query = (
            self.db.query(Shift)
            .options(selectinload(Shift.assignments))
            .filter(Shift.date == target)
        )
        if location:
            query = query.filter(Shift.location == location)
        if team:
            query = query.filter(Shift.team == team)
        return query.order_by(Shift.start_minutes.asc(), Shift.id.asc()).all()

    def assigned_to(
        self,
        employee_id: int,
        start: date | None = None,
        end: date | None = None,
        include_cancelled: bool = False,
    ) -> List[Shift]:
        query = (
            self.db.query(Shift)
            .join(ShiftAssignment, ShiftAssignment.shift_id == Shift.id)
            .options(selectinload(Shift.assignments))
            .filter(ShiftAssignment.employee_id == employee_id)
        )
        if not include_cancelled:
            query = query.filter(Shift.status != "CANCELLED")
        if start:
            query = query.filter(Shift.date >= start)
        if end:
            query = query.filter(Shift.date <= end)
        return query.order_by(Shift.date.asc(), Shift.start_minutes.asc(), Shift.id.asc()).all()

    def claim_seat(self, shift_id: int) -> bool:
        """Take one seat on the shift if it is still open and below capacity.

        The capacity check and the increment are a single UPDATE, so two
        writers racing for the last seat cannot both succeed.
        """
        has_room = or_(Shift.max_employees.is_(None), Shift.assigned_count < Shift.max_employees)
        becomes_full = and_(
            Shift.max_employees.isnot(None),
            Shift.assigned_count + 1 >= Shift.max_employees,
        )
        result = self.db.execute(
            update(Shift)
            .where(Shift.id == shift_id, Shift.status != "CANCELLED", has_room)
            .values(
                assigned_count=Shift.assigned_count + 1,
                status=case((becomes_full, literal("FULL", shift_status_enum)), else_=Shift.status),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def release_seat(self, shift_id: int) -> None:
        self.db.execute(
            update(Shift)
            .where(Shift.id == shift_id)
            .values(
                assigned_count=case((Shift.assigned_count > 0, Shift.assigned_count - 1), else_=0),
                status=case(
                    (Shift.status == "CANCELLED", Shift.status),
                    else_=literal("OPEN", shift_status_enum),
                ),
            )
            .execution_options(synchronize_session=False)
        )
