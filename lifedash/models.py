"""Pydantic models shared by the services, the API and the CLI.

``*Create`` models carry the fields accepted when a record is created,
``*Update`` models the fields of a partial update (only the fields the
caller actually sent are applied) and ``*Read`` models the record as
returned to clients. JSON uses camelCase; Python code uses snake_case.
"""

import datetime as dt
import re
from enum import Enum
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)
from pydantic.alias_generators import to_camel

from lifedash.domain.project import Impact

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Percent = Annotated[int, Field(ge=0, le=100)]
Count = Annotated[int, Field(ge=0)]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_iso_date(value: str) -> str:
    if not _ISO_DATE.match(value):
        raise ValueError("date must be formatted as YYYY-MM-DD")
    dt.date.fromisoformat(value)
    return value


IsoDate = Annotated[str, AfterValidator(_check_iso_date)]


class ExerciseCategory(str, Enum):
    CARDIO = "Cardio"
    STRENGTH = "Strength"
    FLEXIBILITY = "Flexibility"


class CamelModel(BaseModel):
    """Base model: camelCase aliases, readable from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class PatchModel(CamelModel):
    """Base for partial updates.

    Fields listed in ``non_nullable`` may be omitted but not sent as null.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_nulls(self) -> "PatchModel":
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """Fields the caller sent, by Python name."""
        return self.model_dump(exclude_unset=True, exclude=exclude)


# =============================================================================
# Projects
# =============================================================================


class ProjectCreate(CamelModel):
    title: Title
    description: str | None = None
    resources: str | None = None
    progress: Percent | None = None
    due_date: dt.datetime | None = None
    is_priority: bool = False
    impact: Impact = Impact.MEDIUM
    value_ids: list[int] | None = None
    dream_ids: list[int] | None = None


class ProjectUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "title",
        "progress",
        "is_priority",
        "is_archived",
        "impact",
    )

    title: Title | None = None
    description: str | None = None
    resources: str | None = None
    progress: Percent | None = None
    due_date: dt.datetime | None = None
    is_priority: bool | None = None
    is_archived: bool | None = None
    impact: Impact | None = None
    value_ids: list[int] | None = None
    dream_ids: list[int] | None = None


class ProjectRead(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    resources: str | None = None
    progress: int
    due_date: dt.datetime | None = None
    is_priority: bool
    is_archived: bool
    impact: Impact
    created_at: dt.datetime
    value_ids: list[int] = Field(default_factory=list)
    dream_ids: list[int] = Field(default_factory=list)


class ProjectTaskCreate(CamelModel):
    title: Title
    is_completed: bool = False


class ProjectTaskUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "is_completed")

    title: Title | None = None
    is_completed: bool | None = None


class ProjectTaskRead(CamelModel):
    id: int
    project_id: int
    title: str
    is_completed: bool
    created_at: dt.datetime


# =============================================================================
# Today tasks
# =============================================================================


class TodayTaskCreate(CamelModel):
    title: Title
    notes: str | None = None
    is_completed: bool = False
    is_priority: bool = False
    # Defaults to the caller's current date.
    date: dt.date | None = None


class TodayTaskUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "is_completed", "is_priority")

    title: Title | None = None
    notes: str | None = None
    is_completed: bool | None = None
    is_priority: bool | None = None


class TodayTaskRead(CamelModel):
    id: int
    user_id: int
    title: str
    notes: str | None = None
    is_completed: bool
    is_priority: bool
    position: int
    date: dt.date
    created_at: dt.datetime


# =============================================================================
# Habits
# =============================================================================


class HabitCreate(CamelModel):
    title: Title
    completed_days: Count = 0
    target_days: int = Field(default=20, ge=1)
    is_completed_today: bool = False


class HabitUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "title",
        "completed_days",
        "target_days",
        "is_completed_today",
    )

    title: Title | None = None
    completed_days: Count | None = None
    target_days: int | None = Field(default=None, ge=1)
    is_completed_today: bool | None = None


class HabitRead(CamelModel):
    id: int
    user_id: int
    title: str
    completed_days: int
    target_days: int
    is_completed_today: bool


class HabitCompletionRead(CamelModel):
    id: int
    habit_id: int
    year: int
    month: int
    day: int
    created_at: dt.datetime


class HabitDayStatus(CamelModel):
    """Outcome of toggling one habit day."""

    habit: HabitRead
    year: int
    month: int
    day: int
    completed: bool


# =============================================================================
# Flat records
# =============================================================================


class IdeaCreate(CamelModel):
    title: Title
    description: str | None = None
    resources: str | None = None
    votes: int = 0
    tags: list[str] | None = None


class IdeaUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "votes")

    title: Title | None = None
    description: str | None = None
    resources: str | None = None
    votes: int | None = None
    tags: list[str] | None = None


class IdeaRead(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    resources: str | None = None
    votes: int
    tags: list[str] | None = None


class LearningItemCreate(CamelModel):
    title: Title
    category: str | None = None
    resources: str | None = None
    progress: Percent = 0
    is_currently_learning: bool = False


class LearningItemUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "progress", "is_currently_learning")

    title: Title | None = None
    category: str | None = None
    resources: str | None = None
    progress: Percent | None = None
    is_currently_learning: bool | None = None


class LearningItemRead(CamelModel):
    id: int
    user_id: int
    title: str
    category: str | None = None
    resources: str | None = None
    progress: int
    is_currently_learning: bool


class ValueCreate(CamelModel):
    title: Title
    description: str | None = None


class ValueUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title",)

    title: Title | None = None
    description: str | None = None


class ValueRead(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None


class DreamCreate(CamelModel):
    title: Title
    description: str | None = None
    tags: list[str] | None = None
    timeframe: str | None = None


class DreamUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title",)

    title: Title | None = None
    description: str | None = None
    tags: list[str] | None = None
    timeframe: str | None = None


class DreamRead(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    tags: list[str] | None = None
    timeframe: str | None = None


class DateIdeaCreate(CamelModel):
    title: Title
    description: str | None = None
    date: dt.datetime | None = None
    is_scheduled: bool = False


class DateIdeaUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "is_scheduled")

    title: Title | None = None
    description: str | None = None
    date: dt.datetime | None = None
    is_scheduled: bool | None = None


class DateIdeaRead(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    date: dt.datetime | None = None
    is_scheduled: bool


class ParentingTaskCreate(CamelModel):
    title: Title
    description: str | None = None
    is_completed: bool = False


class ParentingTaskUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "is_completed")

    title: Title | None = None
    description: str | None = None
    is_completed: bool | None = None


class ParentingTaskRead(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    is_completed: bool


class QuoteCreate(CamelModel):
    text: Title
    author: str | None = None
    source: str | None = None


class QuoteUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("text",)

    text: Title | None = None
    author: str | None = None
    source: str | None = None


class QuoteRead(CamelModel):
    id: int
    user_id: int
    text: str
    author: str | None = None
    source: str | None = None


class HealthMetricCreate(CamelModel):
    name: Title
    value: Title
    change: str | None = None
    icon: str = "heart-pulse"


class HealthMetricUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "value", "icon")

    name: Title | None = None
    value: Title | None = None
    change: str | None = None
    icon: str | None = None


class HealthMetricRead(CamelModel):
    id: int
    user_id: int
    name: str
    value: str
    change: str | None = None
    icon: str


class ExerciseCreate(CamelModel):
    name: Title
    date: IsoDate
    category: ExerciseCategory
    time: Count | None = None
    distance: Count | None = None
    heart_rate: Count | None = None
    weight: Count | None = None
    reps: Count | None = None
    sets: Count | None = None
    duration: Count | None = None
    muscles_worked: str | None = None


class ExerciseUpdate(PatchModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "date", "category")

    name: Title | None = None
    date: IsoDate | None = None
    category: ExerciseCategory | None = None
    time: Count | None = None
    distance: Count | None = None
    heart_rate: Count | None = None
    weight: Count | None = None
    reps: Count | None = None
    sets: Count | None = None
    duration: Count | None = None
    muscles_worked: str | None = None


class ExerciseRead(CamelModel):
    id: int
    user_id: int
    name: str
    date: str
    category: str
    time: int | None = None
    distance: int | None = None
    heart_rate: int | None = None
    weight: int | None = None
    reps: int | None = None
    sets: int | None = None
    duration: int | None = None
    muscles_worked: str | None = None


class ExerciseDay(CamelModel):
    """All exercises logged on one day of a month."""

    date: str
    day: int
    exercises: list[ExerciseRead]
