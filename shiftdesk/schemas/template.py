from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..clock import format_hhmm


class TemplateCreate(BaseModel):
    name: str
    day_of_week: int
    start_time: str
    end_time: str
    role: str
    skills: List[str] = Field(default_factory=list)
    location: str
    team: Optional[str] = None
    min_employees: int = 1
    max_employees: Optional[int] = None
    is_active: bool = True


class TemplateUpdate(BaseModel):
    name: Optional[str] = None
    day_of_week: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[List[str]] = None
    location: Optional[str] = None
    team: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None
    is_active: Optional[bool] = None


class TemplateRead(BaseModel):
    id: int
    name: str
    day_of_week: int
    start_time: str
    end_time: str
    role: str
    skills: List[str]
    location: str
    team: Optional[str] = None
    min_employees: int
    max_employees: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, template) -> "TemplateRead":
        return cls(
            id=template.id,
            name=template.name,
            day_of_week=template.day_of_week,
            start_time=format_hhmm(template.start_minutes),
            end_time=format_hhmm(template.end_minutes),
            role=template.role,
            skills=list(template.required_skills or []),
            location=template.location,
            team=template.team,
            min_employees=template.min_employees,
            max_employees=template.max_employees,
            is_active=template.is_active,
            created_at=template.created_at,
        )
