from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ..clock import format_hhmm


class TimeOffCreate(BaseModel):
    employee_id: int
    start_date: date
    end_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    type: str
    reason: str


class TimeOffRead(BaseModel):
    id: int
    employee_id: int
    start_date: date
    end_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    type: str
    status: str
    reason: str
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, request) -> "TimeOffRead":
        partial = request.start_minutes is not None and request.end_minutes is not None
        return cls(
            id=request.id,
            employee_id=request.employee_id,
            start_date=request.start_date,
            end_date=request.end_date,
            start_time=format_hhmm(request.start_minutes) if partial else None,
            end_time=format_hhmm(request.end_minutes) if partial else None,
            type=request.type,
            status=request.status,
            reason=request.reason,
            approved_by=request.approved_by,
            approved_at=request.approved_at,
            created_at=request.created_at,
        )
