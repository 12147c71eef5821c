from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, func

from . import Base


class RecurringShiftTemplate(Base):
    __tablename__ = "shift_templates"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    day_of_week = Column(Integer, nullable=False)
    start_minutes = Column(Integer, nullable=False)
    end_minutes = Column(Integer, nullable=False)
    role = Column(String(120), nullable=False)
    required_skills = Column(JSON, nullable=False, default=list)
    location = Column(String(120), nullable=False)
    team = Column(String(120), nullable=True)
    min_employees = Column(Integer, nullable=False, default=1)
    max_employees = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
