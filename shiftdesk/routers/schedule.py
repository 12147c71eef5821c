from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_scheduling_service, require_actor
from ..schemas.analytics import ConflictRead, CoverageStat, WorkloadStat
from ..schemas.common import Page
from ..schemas.shift import AssignmentRead, ShiftCreate, ShiftRead, ShiftUpdate
from ..schemas.template import TemplateCreate, TemplateRead, TemplateUpdate
from ..schemas.time_off import TimeOffCreate, TimeOffRead
from ..services.scheduling import SchedulingService

router = APIRouter(prefix="/api/schedule", tags=["schedule"])


@router.post("/shifts", response_model=ShiftRead, status_code=status.HTTP_201_CREATED)
async def create_shift(
    payload: ShiftCreate,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return ShiftRead.from_model(service.create_shift(payload, actor_id))


@router.get("/shifts", response_model=Page[ShiftRead])
async def list_shifts(
    page: int = 1,
    limit: int | None = None,
    location: str | None = None,
    team: str | None = None,
    role: str | None = None,
    date: date | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    result = service.list_shifts(page, limit, location, team, role, date)
    return Page[ShiftRead](data=[ShiftRead.from_model(shift) for shift in result.items], pagination=result.meta)


@router.get("/shifts/{shift_id}", response_model=ShiftRead)
async def get_shift(
    shift_id: int,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return ShiftRead.from_model(service.get_shift(shift_id))


@router.put("/shifts/{shift_id}", response_model=ShiftRead)
async def update_shift(
    shift_id: int,
    payload: ShiftUpdate,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return ShiftRead.from_model(service.update_shift(shift_id, payload, actor_id))


@router.delete("/shifts/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(
    shift_id: int,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    service.delete_shift(shift_id, actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/shifts/{shift_id}/assign/{employee_id}", response_model=AssignmentRead)
async def assign_employee(
    shift_id: int,
    employee_id: int,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.assign_employee_to_shift(shift_id, employee_id, actor_id)


@router.delete("/shifts/{shift_id}/assign/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_employee(
    shift_id: int,
    employee_id: int,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    service.remove_employee_from_shift(shift_id, employee_id, actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/time-off", response_model=TimeOffRead, status_code=status.HTTP_201_CREATED)
async def create_time_off(
    payload: TimeOffCreate,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return TimeOffRead.from_model(service.create_time_off_request(payload, actor_id))


@router.get("/time-off", response_model=Page[TimeOffRead])
async def list_time_off(
    page: int = 1,
    limit: int | None = None,
    status: str | None = None,
    employee_id: int | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    result = service.list_time_off_requests(page, limit, status, employee_id)
    return Page[TimeOffRead](data=[TimeOffRead.from_model(item) for item in result.items], pagination=result.meta)


@router.put("/time-off/{request_id}/approve", response_model=TimeOffRead)
async def approve_time_off(
    request_id: int,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return TimeOffRead.from_model(service.approve_time_off_request(request_id, actor_id))


@router.put("/time-off/{request_id}/reject", response_model=TimeOffRead)
async def reject_time_off(
    request_id: int,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return TimeOffRead.from_model(service.reject_time_off_request(request_id, actor_id))


@router.get("/daily-schedule", response_model=List[ShiftRead])
async def daily_schedule(
    date: date | None = None,
    location: str | None = None,
    team: str | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [ShiftRead.from_model(shift) for shift in service.get_daily_schedule(date, location, team)]


@router.get("/coverage", response_model=List[CoverageStat])
async def coverage(
    date: date | None = None,
    location: str | None = None,
    team: str | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.get_coverage(date, location, team)


@router.get("/workload/{employee_id}", response_model=WorkloadStat)
async def workload(
    employee_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.get_workload(employee_id, start_date, end_date)


@router.get("/conflicts/{employee_id}", response_model=List[ConflictRead])
async def conflicts(
    employee_id: int,
    shift_id: int | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [ConflictRead.model_validate(conflict) for conflict in service.get_conflicts(employee_id, shift_id)]


@router.post("/templates", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: TemplateCreate,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return TemplateRead.from_model(service.create_recurring_template(payload, actor_id))


@router.get("/templates", response_model=Page[TemplateRead])
async def list_templates(
    page: int = 1,
    limit: int | None = None,
    is_active: bool | None = None,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    result = service.list_templates(page, limit, is_active)
    return Page[TemplateRead](data=[TemplateRead.from_model(item) for item in result.items], pagination=result.meta)


@router.get("/templates/{template_id}", response_model=TemplateRead)
async def get_template(
    template_id: int,
    _: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return TemplateRead.from_model(service.get_template(template_id))


@router.put("/templates/{template_id}", response_model=TemplateRead)
async def update_template(
    template_id: int,
    payload: TemplateUpdate,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return TemplateRead.from_model(service.update_template(template_id, payload, actor_id))


@router.post("/templates/{template_id}/generate", response_model=List[ShiftRead])
async def generate_from_template(
    template_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    actor_id: int = Depends(require_actor),
    service: SchedulingService = Depends(get_scheduling_service),
):
    shifts = service.generate_shifts_from_template(template_id, start_date, end_date, actor_id)
    return [ShiftRead.from_model(shift) for shift in shifts]
