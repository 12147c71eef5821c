from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from ..models import ShiftAssignment


class AssignmentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, assignment: ShiftAssignment) -> ShiftAssignment:
        self.db.add(assignment)
        self.db.flush()
        return assignment

    def find(self, shift_id: int, employee_id: int) -> Optional[ShiftAssignment]:
        return (
            self.db.query(ShiftAssignment)
            .filter(ShiftAssignment.shift_id == shift_id, ShiftAssignment.employee_id == employee_id)
            .one_or_none()
        )

    def delete(self, assignment: ShiftAssignment) -> None:
        self.db.delete(assignment)
        self.db.flush()
