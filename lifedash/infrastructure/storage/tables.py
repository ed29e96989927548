"""SQLModel table definitions.

Every user-owned table carries an indexed ``user_id``. Child rows reference
their parent with ``ON DELETE CASCADE``.
"""

import datetime as dt
from typing import Optional

from sqlalchemy import JSON, Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import Field, SQLModel


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC).replace(tzinfo=None)


def _parent(target: str) -> Column:
    """Indexed, non-null foreign key column cascading on parent delete."""
    return Column(
        Integer,
        ForeignKey(target, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


# =============================================================================
# Projects
# =============================================================================


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    description: Optional[str] = None
    resources: Optional[str] = None
    progress: int = 0
    due_date: Optional[dt.datetime] = None
    is_priority: bool = False
    is_archived: bool = False
    impact: str = "Medium"
    created_at: dt.datetime = Field(default_factory=utc_now)


class ProjectTask(SQLModel, table=True):
    __tablename__ = "project_tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(sa_column=_parent("projects.id"))
    title: str
    is_completed: bool = False
    created_at: dt.datetime = Field(default_factory=utc_now)


class ProjectValue(SQLModel, table=True):
    __tablename__ = "project_values"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(sa_column=_parent("projects.id"))
    value_id: int = Field(sa_column=_parent("values.id"))


class ProjectDream(SQLModel, table=True):
    __tablename__ = "project_dreams"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(sa_column=_parent("projects.id"))
    dream_id: int = Field(sa_column=_parent("dreams.id"))


# =============================================================================
# Today
# =============================================================================


class TodayTask(SQLModel, table=True):
    __tablename__ = "today_tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    notes: Optional[str] = None
    is_completed: bool = False
    is_priority: bool = False
    position: int = 0
    date: dt.date = Field(index=True)
    created_at: dt.datetime = Field(default_factory=utc_now)


# =============================================================================
# Habits
# =============================================================================


class Habit(SQLModel, table=True):
    __tablename__ = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    completed_days: int = 0
    target_days: int = 20
    is_completed_today: bool = False


class HabitCompletion(SQLModel, table=True):
    __tablename__ = "habit_completions"
    __table_args__ = (
        UniqueConstraint("habit_id", "year", "month", "day", name="uq_habit_completion_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(sa_column=_parent("habits.id"))
    year: int
    month: int
    day: int
    created_at: dt.datetime = Field(default_factory=utc_now)


# =============================================================================
# Flat records
# =============================================================================


class Idea(SQLModel, table=True):
    __tablename__ = "ideas"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    description: Optional[str] = None
    resources: Optional[str] = None
    votes: int = 0
    tags: Optional[list[str]] = Field(default=None, sa_column=Column(JSON))


class LearningItem(SQLModel, table=True):
    __tablename__ = "learning_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    category: Optional[str] = None
    resources: Optional[str] = None
    progress: int = 0
    is_currently_learning: bool = False


class Value(SQLModel, table=True):
    __tablename__ = "values"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    description: Optional[str] = None


class Dream(SQLModel, table=True):
    __tablename__ = "dreams"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    description: Optional[str] = None
    tags: Optional[list[str]] = Field(default=None, sa_column=Column(JSON))
    timeframe: Optional[str] = None


class DateIdea(SQLModel, table=True):
    __tablename__ = "date_ideas"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    description: Optional[str] = None
    date: Optional[dt.datetime] = None
    is_scheduled: bool = False


class ParentingTask(SQLModel, table=True):
    __tablename__ = "parenting_tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    description: Optional[str] = None
    is_completed: bool = False


class Quote(SQLModel, table=True):
    __tablename__ = "quotes"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    text: str
    author: Optional[str] = None
    source: Optional[str] = None


class HealthMetric(SQLModel, table=True):
    __tablename__ = "health_metrics"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    name: str
    value: str
    change: Optional[str] = None
    icon: str = "heart-pulse"


class Exercise(SQLModel, table=True):
    __tablename__ = "exercises"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    name: str
    # Plain YYYY-MM-DD, no timezone.
    date: str = Field(index=True)
    category: str
    time: Optional[int] = None
    distance: Optional[int] = None
    heart_rate: Optional[int] = None
    weight: Optional[int] = None
    reps: Optional[int] = None
    sets: Optional[int] = None
    duration: Optional[int] = None
    muscles_worked: Optional[str] = None


__all__ = [
    "utc_now",
    "Project",
    "ProjectTask",
    "ProjectValue",
    "ProjectDream",
    "TodayTask",
    "Habit",
    "HabitCompletion",
    "Idea",
    "LearningItem",
    "Value",
    "Dream",
    "DateIdea",
    "ParentingTask",
    "Quote",
    "Exercise",
]
