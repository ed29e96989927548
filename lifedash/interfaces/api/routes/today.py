"""Today-task endpoints."""

import datetime as dt

from fastapi import APIRouter, Query

from lifedash.interfaces.api.deps import ServicesDep, UserDep
from lifedash.interfaces.api.errors import unwrap
from lifedash.interfaces.api.schemas import PriorityRequest, ReorderRequest
from lifedash.models import TodayTaskCreate, TodayTaskRead, TodayTaskUpdate

router = APIRouter(prefix="/today-tasks", tags=["today"])


@router.get("", response_model=list[TodayTaskRead])
def list_today_tasks(
    services: ServicesDep,
    ctx: UserDep,
    day: dt.date | None = Query(default=None, alias="date"),
):
    """Tasks of one day (default today), priority list first."""
    return services.today.list_tasks(ctx, day)


@router.post("", response_model=TodayTaskRead, status_code=201)
def create_today_task(data: TodayTaskCreate, services: ServicesDep, ctx: UserDep):
    return unwrap(services.today.create_task(ctx, data))


@router.post("/reorder", response_model=list[TodayTaskRead])
def reorder_today_tasks(data: ReorderRequest, services: ServicesDep, ctx: UserDep):
    """Give the listed tasks positions 0..n-1 in the order sent."""
    return unwrap(services.today.reorder(ctx, data.task_ids))


@router.get("/{task_id}", response_model=TodayTaskRead)
def get_today_task(task_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.today.get_task(ctx, task_id))


@router.patch("/{task_id}", response_model=TodayTaskRead)
def update_today_task(task_id: int, data: TodayTaskUpdate, services: ServicesDep, ctx: UserDep):
    return unwrap(services.today.update_task(ctx, task_id, data))


@router.delete("/{task_id}", status_code=204)
def delete_today_task(task_id: int, services: ServicesDep, ctx: UserDep):
    unwrap(services.today.delete_task(ctx, task_id))


@router.post("/{task_id}/toggle", response_model=TodayTaskRead)
def toggle_today_task(task_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.today.toggle_task(ctx, task_id))


@router.post("/{task_id}/priority", response_model=TodayTaskRead)
def set_today_task_priority(
    task_id: int,
    data: PriorityRequest,
    services: ServicesDep,
    ctx: UserDep,
):
    return unwrap(services.today.set_priority(ctx, task_id, data.is_priority))
