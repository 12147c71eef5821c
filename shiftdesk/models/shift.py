from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from . import Base

shift_status_enum = Enum("OPEN", "FULL", "CANCELLED", name="shift_status")
assignment_status_enum = Enum("ASSIGNED", "CONFIRMED", "DECLINED", name="assignment_status")


class Shift(Base):
    __tablename__ = "shifts"
    __table_args__ = (
        CheckConstraint("min_employees >= 1", name="ck_shift_min_employees"),
        CheckConstraint(
            "max_employees IS NULL OR assigned_count <= max_employees",
            name="ck_shift_capacity",
        ),
    )

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    start_minutes = Column(Integer, nullable=False)
    end_minutes = Column(Integer, nullable=False)
    is_overnight = Column(Boolean, nullable=False, default=False)
    role = Column(String(120), nullable=False, index=True)
    required_skills = Column(JSON, nullable=False, default=list)
    location = Column(String(120), nullable=False, index=True)
    team = Column(String(120), nullable=True, index=True)
    min_employees = Column(Integer, nullable=False, default=1)
    max_employees = Column(Integer, nullable=True)
    assigned_count = Column(Integer, nullable=False, default=0)
    status = Column(shift_status_enum, nullable=False, default="OPEN", index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    assignments = relationship(
        "ShiftAssignment",
        back_populates="shift",
        cascade="all, delete-orphan",
    )

    @property
    def assigned_employees(self) -> set[int]:
        return {assignment.employee_id for assignment in self.assignments}


class ShiftAssignment(Base):
    __tablename__ = "shift_assignments"
    __table_args__ = (
        UniqueConstraint("shift_id", "employee_id", name="uq_shift_assignment_employee"),
    )

    id = Column(Integer, primary_key=True)
    shift_id = Column(Integer, ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(Integer, nullable=False, index=True)
    assigned_by = Column(Integer, nullable=False)
    assigned_at = Column(DateTime, nullable=False)
    status = Column(assignment_status_enum, nullable=False, default="ASSIGNED", index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    shift = relationship("Shift", back_populates="assignments")
