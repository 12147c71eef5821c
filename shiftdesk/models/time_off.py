from sqlalchemy import Column, Date, DateTime, Enum, Integer, Text, func

from . import Base

time_off_type_enum = Enum("VACATION", "SICK", "PERSONAL", "OTHER", name="time_off_type")
time_off_status_enum = Enum("PENDING", "APPROVED", "REJECTED", name="time_off_status")


class TimeOffRequest(Base):
    __tablename__ = "time_off_requests"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    # Both set for a partial-day request, both NULL for whole days.
    start_minutes = Column(Integer, nullable=True)
    end_minutes = Column(Integer, nullable=True)
    type = Column(time_off_type_enum, nullable=False)
    status = Column(time_off_status_enum, nullable=False, default="PENDING", index=True)
    reason = Column(Text, nullable=False)
    approved_by = Column(Integer, nullable=True)
    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
