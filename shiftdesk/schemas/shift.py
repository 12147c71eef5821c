from __future__ import annotations

from datetime import date as Date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..clock import format_hhmm


class ShiftCreate(BaseModel):
    date: Date
    start_time: str
    end_time: str
    role: str
    skills: List[str] = Field(default_factory=list)
    location: str
    team: Optional[str] = None
    min_employees: int = 1
    max_employees: Optional[int] = None
    notes: Optional[str] = None


class ShiftUpdate(BaseModel):
    date: Optional[Date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[List[str]] = None
    location: Optional[str] = None
    team: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class ShiftRead(BaseModel):
    id: int
    date: Date
    start_time: str
    end_time: str
    is_overnight: bool
    role: str
    skills: List[str]
    location: str
    team: Optional[str] = None
    assigned_employees: List[int]
    min_employees: int
    max_employees: Optional[int] = None
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, shift) -> "ShiftRead":
        return cls(
            id=shift.id,
            date=shift.date,
            start_time=format_hhmm(shift.start_minutes),
            end_time=format_hhmm(shift.end_minutes),
            is_overnight=shift.is_overnight,
            role=shift.role,
            skills=list(shift.required_skills or []),
            location=shift.location,
            team=shift.team,
            assigned_employees=sorted(shift.assigned_employees),
            min_employees=shift.min_employees,
            max_employees=shift.max_employees,
            status=shift.status,
            notes=shift.notes,
            created_at=shift.created_at,
            updated_at=shift.updated_at,
        )


class AssignmentRead(BaseModel):
    id: int
    shift_id: int
    employee_id: int
    assigned_by: int
    assigned_at: datetime
    status: str
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
