from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models import RecurringShiftTemplate


class TemplateRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, template: RecurringShiftTemplate) -> RecurringShiftTemplate:
        self.db.add(template)
        self.db.flush()
        return template

    def get(self, template_id: int) -> Optional[RecurringShiftTemplate]:
        return self.db.get(RecurringShiftTemplate, template_id)

    def list_page(
        self,
        offset: int,
        limit: int,
        is_active: bool | None = None,
    ) -> Tuple[List[RecurringShiftTemplate], int]:
        query = self.db.query(RecurringShiftTemplate)
        if is_active is not None:
            query = query.filter(RecurringShiftTemplate.is_active.is_(is_active))
        total = query.count()
        items = (
            query.order_by(RecurringShiftTemplate.day_of_week.asc(), RecurringShiftTemplate.start_minutes.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total
