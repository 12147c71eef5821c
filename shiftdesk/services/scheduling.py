"""Shift, assignment, time-off and template lifecycle.

:class:`SchedulingService` is the only writer. It validates input before
touching storage, runs the conflict detector before committing an
assignment and commits each operation as a single transaction.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import clock
from ..config import Settings, get_settings
from ..errors import BadRequestError, InternalError, NotFoundError, SchedulingError, ValidationError
from ..models import RecurringShiftTemplate, Shift, ShiftAssignment, TimeOffRequest
from ..repositories import AssignmentRepository, ShiftRepository, TemplateRepository, TimeOffRepository
from ..schemas.analytics import CoverageStat, WorkloadStat
from ..schemas.common import PageMeta
from ..schemas.shift import ShiftCreate, ShiftUpdate
from ..schemas.template import TemplateCreate, TemplateUpdate
from ..schemas.time_off import TimeOffCreate
from . import analytics, conflicts, expansion
from .directory import EmployeeDirectory
from .events import EventSink, LoggingEventSink

logger = logging.getLogger(__name__)

TIME_OFF_TYPES = {"VACATION", "SICK", "PERSONAL", "OTHER"}
TIME_OFF_STATUSES = {"PENDING", "APPROVED", "REJECTED"}


@dataclass
class Paginated:
    items: list
    meta: PageMeta


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _parse_time(value: str | None, field: str) -> int:
    if value is None:
        raise ValidationError(f"{field} is required")
    try:
        return clock.parse_hhmm(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field}. Use HH:mm format") from exc


def _parse_window(start_time: str | None, end_time: str | None) -> tuple[int, int]:
    start = _parse_time(start_time, "start_time")
    end = _parse_time(end_time, "end_time")
    if start == end:
        raise ValidationError("Start time and end time must differ")
    return start, end


def _required_text(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    return cleaned


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _clean_skills(skills: list[str] | None) -> list[str]:
    cleaned: list[str] = []
    for skill in skills or []:
        value = (skill or "").strip()
        if value and value not in cleaned:
            cleaned.append(value)
    if not cleaned:
        raise ValidationError("At least one skill is required")
    return cleaned


def _check_capacity(min_employees: int | None, max_employees: int | None) -> None:
    if min_employees is None or min_employees < 1:
        raise ValidationError("min_employees must be a positive number")
    if max_employees is None:
        return
    if max_employees < 1:
        raise ValidationError("max_employees must be a positive number")
    if max_employees < min_employees:
        raise ValidationError("max_employees cannot be lower than min_employees")


def _check_day_of_week(value: int | None) -> int:
    if value is None or not 0 <= value <= 6:
        raise ValidationError("Day of week must be 0-6")
    return value


def _check_range(start: date | None, end: date | None) -> tuple[date, date]:
    if start is None or end is None:
        raise ValidationError("Start date and end date are required")
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return start, end


class SchedulingService:
    def __init__(
        self,
        db: Session,
        settings: Settings | None = None,
        events: EventSink | None = None,
        directory: EmployeeDirectory | None = None,
    ) -> None:
        self.db = db
        self.settings = settings or get_settings()
        self.events = events or LoggingEventSink()
        self.directory = directory or EmployeeDirectory()
        self.shifts = ShiftRepository(db)
        self.assignments = AssignmentRepository(db)
        self.time_off = TimeOffRepository(db)
        self.templates = TemplateRepository(db)

    # Plumbing

    @contextmanager
    def _transaction(self, action: str) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except SchedulingError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database failure while trying to %s", action)
            raise InternalError(f"Could not {action}") from exc

    def _publish(
        self,
        action: str,
        entity_type: str,
        entity_id: int,
        actor_id: int | None = None,
        **payload: Any,
    ) -> None:
        try:
            self.events.publish(action, entity_type, entity_id, actor_id, payload)
        except Exception:
            logger.exception("Event sink failed for %s on %s %s", action, entity_type, entity_id)

    def _page(self, page: int, limit: int | None) -> tuple[int, int]:
        limit = self.settings.default_page_size if limit is None else limit
        if page < 1:
            raise ValidationError("page must be 1 or greater")
        if not 1 <= limit <= self.settings.max_page_size:
            raise ValidationError(f"limit must be between 1 and {self.settings.max_page_size}")
        return (page - 1) * limit, limit

    # Shifts

    def create_shift(self, payload: ShiftCreate, actor_id: int | None = None) -> Shift:
        start, end = _parse_window(payload.start_time, payload.end_time)
        _check_capacity(payload.min_employees, payload.max_employees)
        shift = Shift(
            date=payload.date,
            start_minutes=start,
            end_minutes=end,
            is_overnight=clock.is_overnight(start, end),
            role=_required_text(payload.role, "Role"),
            required_skills=_clean_skills(payload.skills),
            location=_required_text(payload.location, "Location"),
            team=_optional_text(payload.team),
            min_employees=payload.min_employees,
            max_employees=payload.max_employees,
            assigned_count=0,
            status="OPEN",
            notes=payload.notes,
        )
        with self._transaction("create shift"):
            self.shifts.add(shift)
        self._publish("CREATE", "shift", shift.id, actor_id)
        return shift

    def get_shift(self, shift_id: int) -> Shift:
        shift = self.shifts.get(shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def list_shifts(
        self,
        page: int = 1,
        limit: int | None = None,
        location: str | None = None,
        team: str | None = None,
        role: str | None = None,
        on_date: date | None = None,
    ) -> Paginated:
        offset, limit = self._page(page, limit)
        items, total = self.shifts.list_page(offset, limit, location, team, role, on_date)
        return Paginated(items=items, meta=PageMeta.build(page, limit, total))

    def update_shift(self, shift_id: int, patch: ShiftUpdate, actor_id: int | None = None) -> Shift:
        shift = self.get_shift(shift_id)
        changes = patch.model_dump(exclude_unset=True)

        with self._transaction("update shift"):
            if "start_time" in changes or "end_time" in changes:
                start_value = changes.get("start_time") or clock.format_hhmm(shift.start_minutes)
                end_value = changes.get("end_time") or clock.format_hhmm(shift.end_minutes)
                start, end = _parse_window(start_value, end_value)
                shift.start_minutes = start
                shift.end_minutes = end
                shift.is_overnight = clock.is_overnight(start, end)

            if "date" in changes:
                if changes["date"] is None:
                    raise ValidationError("date is required")
                shift.date = changes["date"]
            if "role" in changes:
                shift.role = _required_text(changes["role"], "Role")
            if "location" in changes:
                shift.location = _required_text(changes["location"], "Location")
            if "skills" in changes:
                shift.required_skills = _clean_skills(changes["skills"])
            if "team" in changes:
                shift.team = _optional_text(changes["team"])
            if "notes" in changes:
                shift.notes = changes["notes"]

            if "min_employees" in changes or "max_employees" in changes:
                min_employees = changes.get("min_employees", shift.min_employees)
                max_employees = changes.get("max_employees", shift.max_employees)
                _check_capacity(min_employees, max_employees)
                if max_employees is not None and max_employees < shift.assigned_count:
                    raise ValidationError(
                        f"max_employees cannot be lower than the {shift.assigned_count} employee(s) already assigned"
                    )
                shift.min_employees = min_employees
                shift.max_employees = max_employees

            requested_status = changes.get("status")
            if requested_status is not None and requested_status != shift.status:
                if requested_status != "CANCELLED":
                    raise ValidationError("Only cancellation can be requested; OPEN and FULL follow membership")
                shift.status = "CANCELLED"
            elif shift.status != "CANCELLED":
                full = shift.max_employees is not None and shift.assigned_count >= shift.max_employees
                shift.status = "FULL" if full else "OPEN"

        self._publish("UPDATE", "shift", shift.id, actor_id, changes=sorted(changes))
        return shift

    def delete_shift(self, shift_id: int, actor_id: int | None = None) -> None:
        shift = self.get_shift(shift_id)
        with self._transaction("delete shift"):
            self.shifts.delete(shift)
        self._publish("DELETE", "shift", shift_id, actor_id)

    def get_daily_schedule(
        self,
        target: date | None,
        location: str | None = None,
        team: str | None = None,
    ) -> List[Shift]:
        if target is None:
            raise ValidationError("Date parameter is required")
        return self.shifts.on_date(target, location, team)

    # Assignments

    def assign_employee_to_shift(self, shift_id: int, employee_id: int, actor_id: int) -> ShiftAssignment:
        shift = self.get_shift(shift_id)
        if shift.status == "CANCELLED":
            raise BadRequestError("Cannot assign to cancelled shift")
        if shift.max_employees is not None and shift.assigned_count >= shift.max_employees:
            raise BadRequestError("Shift is at maximum capacity")
        if self.assignments.find(shift_id, employee_id):
            raise BadRequestError("Employee is already assigned to this shift")

        found = self._conflicts_for(employee_id, conflicts.slot_for(shift))
        if found:
            details = ", ".join(conflict.description for conflict in found)
            raise BadRequestError(f"Assignment conflicts detected: {details}")

        assignment = ShiftAssignment(
            shift_id=shift_id,
            employee_id=employee_id,
            assigned_by=actor_id,
            assigned_at=_utcnow(),
            status="ASSIGNED",
        )
        with self._transaction("assign employee"):
            # The conditional update is the real capacity gate; the read above may be stale.
            if not self.shifts.claim_seat(shift_id):
                self.db.expire(shift)
                if shift.status == "CANCELLED":
                    raise BadRequestError("Cannot assign to cancelled shift")
                raise BadRequestError("Shift is at maximum capacity")
            try:
                self.assignments.add(assignment)
            except IntegrityError as exc:
                raise BadRequestError("Employee is already assigned to this shift") from exc
        self.db.expire(shift)
        logger.info("Assigned employee %s to shift %s", employee_id, shift_id)
        self._publish("ASSIGN", "shift", shift_id, actor_id, employee_id=employee_id)
        return assignment

    def remove_employee_from_shift(self, shift_id: int, employee_id: int, actor_id: int | None = None) -> None:
        assignment = self.assignments.find(shift_id, employee_id)
        if not assignment:
            raise NotFoundError("Assignment not found")
        with self._transaction("remove employee"):
            self.assignments.delete(assignment)
            self.shifts.release_seat(shift_id)
        shift = self.shifts.get(shift_id)
        if shift is not None:
            self.db.expire(shift)
        self._publish("UNASSIGN", "shift", shift_id, actor_id, employee_id=employee_id)

    def get_conflicts(self, employee_id: int, shift_id: int | None = None) -> List[conflicts.Conflict]:
        candidate = None
        if shift_id is not None:
            candidate = conflicts.slot_for(self.get_shift(shift_id))
        return self._conflicts_for(employee_id, candidate)

    def _conflicts_for(
        self,
        employee_id: int,
        candidate: Optional[conflicts.ShiftSlot],
    ) -> List[conflicts.Conflict]:
        slots = [conflicts.slot_for(shift) for shift in self.shifts.assigned_to(employee_id)]
        leaves = [conflicts.leave_for(request) for request in self.time_off.approved_for(employee_id)]
        return conflicts.detect(employee_id, slots, leaves, candidate)

    # Time off

    def create_time_off_request(self, payload: TimeOffCreate, actor_id: int | None = None) -> TimeOffRequest:
        if payload.employee_id is None or payload.employee_id < 1:
            raise ValidationError("Employee ID is required")
        start_date, end_date = _check_range(payload.start_date, payload.end_date)
        if payload.type not in TIME_OFF_TYPES:
            raise ValidationError(f"type must be one of {', '.join(sorted(TIME_OFF_TYPES))}")
        start_minutes = end_minutes = None
        if payload.start_time is not None or payload.end_time is not None:
            start_minutes, end_minutes = _parse_window(payload.start_time, payload.end_time)

        request = TimeOffRequest(
            employee_id=payload.employee_id,
            start_date=start_date,
            end_date=end_date,
            start_minutes=start_minutes,
            end_minutes=end_minutes,
            type=payload.type,
            status="PENDING",
            reason=_required_text(payload.reason, "Reason"),
        )
        with self._transaction("create time-off request"):
            self.time_off.add(request)
        self._publish("CREATE", "time_off", request.id, actor_id, employee_id=request.employee_id)
        return request

    def list_time_off_requests(
        self,
        page: int = 1,
        limit: int | None = None,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> Paginated:
        if status is not None and status not in TIME_OFF_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(sorted(TIME_OFF_STATUSES))}")
        offset, limit = self._page(page, limit)
        items, total = self.time_off.list_page(offset, limit, status, employee_id)
        return Paginated(items=items, meta=PageMeta.build(page, limit, total))

    def approve_time_off_request(self, request_id: int, actor_id: int) -> TimeOffRequest:
        return self._decide_time_off(request_id, actor_id, "APPROVED")

    def reject_time_off_request(self, request_id: int, actor_id: int) -> TimeOffRequest:
        return self._decide_time_off(request_id, actor_id, "REJECTED")

    def _decide_time_off(self, request_id: int, actor_id: int, outcome: str) -> TimeOffRequest:
        request = self.time_off.get(request_id)
        if not request:
            raise NotFoundError("Time-off request not found")
        if request.status != "PENDING":
            raise BadRequestError(f"Time-off request is already {request.status.lower()}")
        with self._transaction(f"mark time-off request {outcome.lower()}"):
            request.status = outcome
            request.approved_by = actor_id
            request.approved_at = _utcnow()
        action = "APPROVE" if outcome == "APPROVED" else "REJECT"
        self._publish(action, "time_off", request.id, actor_id, employee_id=request.employee_id)
        return request

    # Analytics

    def get_coverage(
        self,
        target: date | None,
        location: str | None = None,
        team: str | None = None,
    ) -> List[CoverageStat]:
        if target is None:
            raise ValidationError("Date parameter is required")
        return analytics.coverage(target, self.shifts.on_date(target, location, team))

    def get_workload(self, employee_id: int, start: date | None, end: date | None) -> WorkloadStat:
        start, end = _check_range(start, end)
        shifts = self.shifts.assigned_to(employee_id, start, end, include_cancelled=True)
        return analytics.workload(
            employee_id,
            shifts,
            start,
            end,
            employee_name=self.directory.display_name(employee_id) or "",
            week_hours=self.settings.standard_week_hours,
        )

    # Recurring templates

    def create_recurring_template(
        self,
        payload: TemplateCreate,
        actor_id: int | None = None,
    ) -> RecurringShiftTemplate:
        start, end = _parse_window(payload.start_time, payload.end_time)
        _check_capacity(payload.min_employees, payload.max_employees)
        template = RecurringShiftTemplate(
            name=_required_text(payload.name, "Template name"),
            day_of_week=_check_day_of_week(payload.day_of_week),
            start_minutes=start,
            end_minutes=end,
            role=_required_text(payload.role, "Role"),
            required_skills=_clean_skills(payload.skills),
            location=_required_text(payload.location, "Location"),
            team=_optional_text(payload.team),
            min_employees=payload.min_employees,
            max_employees=payload.max_employees,
            is_active=payload.is_active,
        )
        with self._transaction("create template"):
            self.templates.add(template)
        self._publish("CREATE", "template", template.id, actor_id)
        return template

    def get_template(self, template_id: int) -> RecurringShiftTemplate:
        template = self.templates.get(template_id)
        if not template:
            raise NotFoundError("Template not found")
        return template

    def list_templates(self, page: int = 1, limit: int | None = None, is_active: bool | None = None) -> Paginated:
        offset, limit = self._page(page, limit)
        items, total = self.templates.list_page(offset, limit, is_active)
        return Paginated(items=items, meta=PageMeta.build(page, limit, total))

    def update_template(
        self,
        template_id: int,
        patch: TemplateUpdate,
        actor_id: int | None = None,
    ) -> RecurringShiftTemplate:
        template = self.get_template(template_id)
        changes = patch.model_dump(exclude_unset=True)

        with self._transaction("update template"):
            if "start_time" in changes or "end_time" in changes:
                start, end = _parse_window(
                    changes.get("start_time") or clock.format_hhmm(template.start_minutes),
                    changes.get("end_time") or clock.format_hhmm(template.end_minutes),
                )
                template.start_minutes = start
                template.end_minutes = end
            if "name" in changes:
                template.name = _required_text(changes["name"], "Template name")
            if "day_of_week" in changes:
                template.day_of_week = _check_day_of_week(changes["day_of_week"])
            if "role" in changes:
                template.role = _required_text(changes["role"], "Role")
            if "location" in changes:
                template.location = _required_text(changes["location"], "Location")
            if "skills" in changes:
                template.required_skills = _clean_skills(changes["skills"])
            if "team" in changes:
                template.team = _optional_text(changes["team"])
            if "min_employees" in changes or "max_employees" in changes:
                min_employees = changes.get("min_employees", template.min_employees)
                max_employees = changes.get("max_employees", template.max_employees)
                _check_capacity(min_employees, max_employees)
                template.min_employees = min_employees
                template.max_employees = max_employees
            if changes.get("is_active") is not None:
                template.is_active = changes["is_active"]

        self._publish("UPDATE", "template", template.id, actor_id, changes=sorted(changes))
        return template

    def generate_shifts_from_template(
        self,
        template_id: int,
        start: date | None,
        end: date | None,
        actor_id: int | None = None,
    ) -> List[Shift]:
        template = self.get_template(template_id)
        start, end = _check_range(start, end)
        span_days = (end - start).days + 1
        if span_days > self.settings.max_generation_span_days:
            raise ValidationError(
                f"Date range spans {span_days} days; at most {self.settings.max_generation_span_days} allowed"
            )
        if not template.is_active:
            raise BadRequestError("Template is inactive")

        shifts = [
            Shift(
                date=draft.date,
                start_minutes=draft.start_minutes,
                end_minutes=draft.end_minutes,
                is_overnight=draft.is_overnight,
                role=draft.role,
                required_skills=list(draft.required_skills),
                location=draft.location,
                team=draft.team,
                min_employees=draft.min_employees,
                max_employees=draft.max_employees,
                assigned_count=0,
                status=draft.status,
            )
            for draft in expansion.expand(template, start, end)
        ]
        with self._transaction("generate shifts"):
            self.shifts.add_all(shifts)
        logger.info("Generated %d shift(s) from template %s", len(shifts), template_id)
        self._publish("GENERATE", "template", template_id, actor_id, shift_ids=[shift.id for shift in shifts])
        return shifts
