from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CoverageStat(BaseModel):
    date: Date
    location: str
    team: Optional[str] = None
    role: str
    required: int
    assigned: int
    coverage: float
    gaps: int
    utilization: float


class DateRange(BaseModel):
    start: Date
    end: Date


class WorkloadStat(BaseModel):
    employee_id: int
    employee_name: str = ""
    date_range: DateRange
    total_hours: float
    total_shifts: int
    average_hours_per_day: float
    overtime_hours: float
    utilization: float


class ConflictRead(BaseModel):
    type: str
    employee_id: int
    shift_id: int
    description: str
    severity: str

    model_config = ConfigDict(from_attributes=True)
