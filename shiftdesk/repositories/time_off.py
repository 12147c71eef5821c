from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models import TimeOffRequest


class TimeOffRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, request: TimeOffRequest) -> TimeOffRequest:
        self.db.add(request)
        self.db.flush()
        return request

    def get(self, request_id: int) -> Optional[TimeOffRequest]:
        return self.db.get(TimeOffRequest, request_id)

    def list_page(
        self,
        offset: int,
        limit: int,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> Tuple[List[TimeOffRequest], int]:
        query = self.db.query(TimeOffRequest)
        if status:
            query = query.filter(TimeOffRequest.status == status)
        if employee_id:
            query = query.filter(TimeOffRequest.employee_id == employee_id)
        total = query.count()
        items = (
            query.order_by(TimeOffRequest.start_date.desc(), TimeOffRequest.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def approved_for(self, employee_id: int) -> List[TimeOffRequest]:
        return (
            self.db.query(TimeOffRequest)
            .filter(TimeOffRequest.employee_id == employee_id, TimeOffRequest.status == "APPROVED")
            .order_by(TimeOffRequest.start_date.asc())
            .all()
        )
