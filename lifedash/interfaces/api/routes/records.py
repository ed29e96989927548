"""CRUD endpoints for the plain record types, plus their actions.

``record_router`` builds the five conventional endpoints for one resource;
the few extra actions are added to the returned router.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from lifedash.application import RecordService, Services
from lifedash.interfaces.api.deps import ServicesDep, UserDep
from lifedash.interfaces.api.errors import unwrap
from lifedash.interfaces.api.schemas import HabitDayRequest, VoteRequest
from lifedash.models import (
    DateIdeaCreate,
    DateIdeaRead,
    DateIdeaUpdate,
    DreamCreate,
    DreamRead,
    DreamUpdate,
    ExerciseCreate,
    ExerciseDay,
    ExerciseRead,
    ExerciseUpdate,
    HabitCompletionRead,
    HabitCreate,
    HabitDayStatus,
    HabitRead,
    HabitUpdate,
    HealthMetricCreate,
    HealthMetricRead,
    HealthMetricUpdate,
    IdeaCreate,
    IdeaRead,
    IdeaUpdate,
    LearningItemCreate,
    LearningItemRead,
    LearningItemUpdate,
    ParentingTaskCreate,
    ParentingTaskRead,
    ParentingTaskUpdate,
    QuoteCreate,
    QuoteRead,
    QuoteUpdate,
    ValueCreate,
    ValueRead,
    ValueUpdate,
)


def record_router(
    path: str,
    service_name: str,
    create_model: type[BaseModel],
    update_model: type[BaseModel],
    read_model: type[BaseModel],
) -> APIRouter:
    """Build list / get / create / update / delete routes for one resource.

    Args:
        path: URL segment under ``/api``, e.g. ``"date-ideas"``.
        service_name: Attribute of ``Services`` holding the RecordService.
        create_model: Body model of POST.
        update_model: Body model of PATCH.
        read_model: Response model.

    Returns:
        Router with prefix ``/<path>``.
    """
    router = APIRouter(prefix=f"/{path}", tags=[path])

    def service(services: Services) -> RecordService:
        return getattr(services, service_name)

    @router.get("", response_model=list[read_model])  # type: ignore[valid-type]
    def list_records(services: ServicesDep, ctx: UserDep):
        return service(services).list(ctx)

    @router.post("", response_model=read_model, status_code=201)
    def create_record(data: create_model, services: ServicesDep, ctx: UserDep):  # type: ignore[valid-type]
        return unwrap(service(services).create(ctx, data))

    @router.get("/{record_id}", response_model=read_model)
    def get_record(record_id: int, services: ServicesDep, ctx: UserDep):
        return unwrap(service(services).get(ctx, record_id))

    @router.patch("/{record_id}", response_model=read_model)
    def update_record(record_id: int, data: update_model, services: ServicesDep, ctx: UserDep):  # type: ignore[valid-type]
        return unwrap(service(services).update(ctx, record_id, data))

    @router.delete("/{record_id}", status_code=204)
    def delete_record(record_id: int, services: ServicesDep, ctx: UserDep):
        unwrap(service(services).delete(ctx, record_id))

    return router


# =============================================================================
# Ideas and learning
# =============================================================================

ideas = record_router("ideas", "ideas", IdeaCreate, IdeaUpdate, IdeaRead)


@ideas.post("/{idea_id}/vote", response_model=IdeaRead)
def vote_idea(idea_id: int, data: VoteRequest, services: ServicesDep, ctx: UserDep):
    return unwrap(services.ideas.vote(ctx, idea_id, data.upvote))


learning = record_router(
    "learning", "learning", LearningItemCreate, LearningItemUpdate, LearningItemRead
)

# =============================================================================
# Values and dreams
# =============================================================================

values = record_router("values", "values", ValueCreate, ValueUpdate, ValueRead)
dreams = record_router("dreams", "dreams", DreamCreate, DreamUpdate, DreamRead)

# =============================================================================
# Family
# =============================================================================

date_ideas = record_router(
    "date-ideas", "date_ideas", DateIdeaCreate, DateIdeaUpdate, DateIdeaRead
)
parenting_tasks = record_router(
    "parenting-tasks",
    "parenting_tasks",
    ParentingTaskCreate,
    ParentingTaskUpdate,
    ParentingTaskRead,
)


@parenting_tasks.post("/{task_id}/toggle", response_model=ParentingTaskRead)
def toggle_parenting_task(task_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.parenting_tasks.toggle(ctx, task_id))


quotes = record_router("quotes", "quotes", QuoteCreate, QuoteUpdate, QuoteRead)

# =============================================================================
# Habits and health metrics
# =============================================================================

habits = record_router("habits", "habits", HabitCreate, HabitUpdate, HabitRead)


@habits.post("/{habit_id}/toggle", response_model=HabitRead)
def toggle_habit_today(habit_id: int, services: ServicesDep, ctx: UserDep):
    """Toggle completion for the caller's current date."""
    return unwrap(services.habits.toggle_today(ctx, habit_id)).habit


@habits.post("/{habit_id}/toggle-day", response_model=HabitDayStatus)
def toggle_habit_day(habit_id: int, data: HabitDayRequest, services: ServicesDep, ctx: UserDep):
    return unwrap(services.habits.toggle_day(ctx, habit_id, data.year, data.month, data.day))


@habits.get("/{habit_id}/completions/{year}/{month}", response_model=list[HabitCompletionRead])
def habit_completions(habit_id: int, year: int, month: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.habits.completions(ctx, habit_id, year, month))


health_metrics = record_router(
    "health-metrics",
    "health_metrics",
    HealthMetricCreate,
    HealthMetricUpdate,
    HealthMetricRead,
)

# =============================================================================
# Exercise
# =============================================================================

exercises = record_router(
    "exercises", "exercises", ExerciseCreate, ExerciseUpdate, ExerciseRead
)
exercise_completions = APIRouter(prefix="/exercise-completions", tags=["exercises"])


@exercise_completions.get("/{year}/{month}", response_model=list[ExerciseDay])
def exercise_month(year: int, month: int, services: ServicesDep, ctx: UserDep):
    """Exercises of one month, grouped by day."""
    return unwrap(services.exercises.month(ctx, year, month))


routers = [
    ideas,
    learning,
    values,
    dreams,
    date_ideas,
    parenting_tasks,
    quotes,
    habits,
    health_metrics,
    exercises,
    exercise_completions,
]
