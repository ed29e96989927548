"""Repositories over SQLModel tables.

Each repository wraps one session. Lookups are scoped to the owning user:
a row that belongs to someone else is reported exactly like a missing row
(``None``). Writes are flushed but never committed here, committing is the
job of the unit of work that owns the session.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Generic, TypeVar

from sqlmodel import Session, SQLModel, col, func, select

from lifedash.domain.habit import DayKey
from lifedash.domain.today import TaskSlot
from lifedash.infrastructure.storage.tables import (
    Dream,
    Exercise,
    Habit,
    HabitCompletion,
    Project,
    ProjectDream,
    ProjectTask,
    ProjectValue,
    TodayTask,
    Value,
)

RowT = TypeVar("RowT", bound=SQLModel)


class OwnedRepository(Generic[RowT]):
    """Generic repository for tables with ``id`` and ``user_id`` columns."""

    def __init__(self, session: Session, model: type[RowT]) -> None:
        """Initialize the repository.

        Args:
            session: Session to run statements on.
            model: Table class handled by this repository.
        """
        self.session = session
        self.model = model

    def get(self, user_id: int, record_id: int) -> RowT | None:
        """Fetch one row owned by ``user_id``."""
        row = self.session.get(self.model, record_id)
        if row is None or getattr(row, "user_id") != user_id:
            return None
        return row

    def list(self, user_id: int) -> list[RowT]:
        """All rows owned by ``user_id`` in creation order."""
        statement = (
            select(self.model)
            .where(col(getattr(self.model, "user_id")) == user_id)
            .order_by(col(getattr(self.model, "id")))
        )
        return list(self.session.exec(statement))

    def add(self, row: RowT) -> RowT:
        """Stage a row and flush so it gets an id."""
        self.session.add(row)
        self.session.flush()
        self.session.refresh(row)
        return row

    def delete(self, row: RowT) -> None:
        self.session.delete(row)
        self.session.flush()


# =============================================================================
# Projects
# =============================================================================


class ProjectRepository(OwnedRepository[Project]):
    """Projects plus their tasks and value / dream join rows."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, Project)

    def list_visible(self, user_id: int, *, include_archived: bool = False) -> list[Project]:
        statement = select(Project).where(Project.user_id == user_id)
        if not include_archived:
            statement = statement.where(col(Project.is_archived).is_(False))
        return list(self.session.exec(statement.order_by(col(Project.id))))

    def priority_projects(self, user_id: int) -> list[Project]:
        statement = select(Project).where(
            Project.user_id == user_id,
            col(Project.is_priority).is_(True),
        )
        return list(self.session.exec(statement))

    def delete_project(self, project: Project) -> None:
        """Delete a project with its tasks and join rows."""
        assert project.id is not None
        for row in [
            *self.tasks(project.id),
            *self._value_links(project.id),
            *self._dream_links(project.id),
        ]:
            self.session.delete(row)
        self.delete(project)

    # --- tasks ---------------------------------------------------------------

    def tasks(self, project_id: int) -> list[ProjectTask]:
        statement = (
            select(ProjectTask)
            .where(ProjectTask.project_id == project_id)
            .order_by(col(ProjectTask.id))
        )
        return list(self.session.exec(statement))

    def get_task(self, user_id: int, task_id: int) -> tuple[ProjectTask, Project] | None:
        """Fetch a task together with its project, if the caller owns the project."""
        task = self.session.get(ProjectTask, task_id)
        if task is None:
            return None
        project = self.get(user_id, task.project_id)
        if project is None:
            return None
        return task, project

    def completion_flags(self, project_id: int) -> list[bool]:
        statement = select(ProjectTask.is_completed).where(ProjectTask.project_id == project_id)
        return [bool(flag) for flag in self.session.exec(statement)]

    # --- relations -----------------------------------------------------------

    def _value_links(self, project_id: int) -> list[ProjectValue]:
        statement = select(ProjectValue).where(ProjectValue.project_id == project_id)
        return list(self.session.exec(statement))

    def _dream_links(self, project_id: int) -> list[ProjectDream]:
        statement = select(ProjectDream).where(ProjectDream.project_id == project_id)
        return list(self.session.exec(statement))

    def value_ids(self, project_id: int) -> list[int]:
        return [link.value_id for link in sorted(self._value_links(project_id), key=_link_order)]

    def dream_ids(self, project_id: int) -> list[int]:
        return [link.dream_id for link in sorted(self._dream_links(project_id), key=_link_order)]

    def owned_value_ids(self, user_id: int, ids: Sequence[int]) -> set[int]:
        if not ids:
            return set()
        statement = select(Value.id).where(Value.user_id == user_id, col(Value.id).in_(ids))
        return {value_id for value_id in self.session.exec(statement) if value_id is not None}

    def owned_dream_ids(self, user_id: int, ids: Sequence[int]) -> set[int]:
        if not ids:
            return set()
        statement = select(Dream.id).where(Dream.user_id == user_id, col(Dream.id).in_(ids))
        return {dream_id for dream_id in self.session.exec(statement) if dream_id is not None}

    def replace_values(self, project_id: int, value_ids: Iterable[int]) -> None:
        """Delete every value link of the project and insert the given ones."""
        for link in self._value_links(project_id):
            self.session.delete(link)
        self.session.flush()
        for value_id in value_ids:
            self.session.add(ProjectValue(project_id=project_id, value_id=value_id))
        self.session.flush()

    def replace_dreams(self, project_id: int, dream_ids: Iterable[int]) -> None:
        """Delete every dream link of the project and insert the given ones."""
        for link in self._dream_links(project_id):
            self.session.delete(link)
        self.session.flush()
        for dream_id in dream_ids:
            self.session.add(ProjectDream(project_id=project_id, dream_id=dream_id))
        self.session.flush()

    def unlink_value(self, value_id: int) -> None:
        """Drop every project link to a value that is about to be deleted."""
        statement = select(ProjectValue).where(ProjectValue.value_id == value_id)
        for link in list(self.session.exec(statement)):
            self.session.delete(link)
        self.session.flush()

    def unlink_dream(self, dream_id: int) -> None:
        """Drop every project link to a dream that is about to be deleted."""
        statement = select(ProjectDream).where(ProjectDream.dream_id == dream_id)
        for link in list(self.session.exec(statement)):
            self.session.delete(link)
        self.session.flush()


def _link_order(link: ProjectValue | ProjectDream) -> int:
    return link.id or 0


# =============================================================================
# Today tasks
# =============================================================================


class TodayTaskRepository(OwnedRepository[TodayTask]):
    """Today tasks, read per (user, date)."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, TodayTask)

    def for_day(self, user_id: int, day: date) -> list[TodayTask]:
        """Tasks of one day: priority partition first, each by position."""
        statement = (
            select(TodayTask)
            .where(TodayTask.user_id == user_id, TodayTask.date == day)
            .order_by(
                col(TodayTask.is_priority).desc(),
                col(TodayTask.position),
                col(TodayTask.id),
            )
        )
        return list(self.session.exec(statement))

    def owned_by_ids(self, user_id: int, ids: Sequence[int]) -> list[TodayTask]:
        if not ids:
            return []
        statement = select(TodayTask).where(
            TodayTask.user_id == user_id,
            col(TodayTask.id).in_(ids),
        )
        return list(self.session.exec(statement))

    def apply_slots(self, rows: Iterable[TodayTask], slots: Iterable[TaskSlot]) -> None:
        """Write slot flags and positions back onto their rows."""
        by_id = {row.id: row for row in rows}
        for slot in slots:
            row = by_id[slot.id]
            row.is_priority = slot.is_priority
            row.position = slot.position
            self.session.add(row)
        self.session.flush()


def to_slot(task: TodayTask) -> TaskSlot:
    assert task.id is not None
    return TaskSlot(
        id=task.id,
        day=task.date,
        is_priority=task.is_priority,
        position=task.position,
    )


# =============================================================================
# Habits
# =============================================================================


class HabitRepository(OwnedRepository[Habit]):
    """Habits and their per-day completion rows."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, Habit)

    def find_completion(self, habit_id: int, key: DayKey) -> HabitCompletion | None:
        statement = select(HabitCompletion).where(
            HabitCompletion.habit_id == habit_id,
            HabitCompletion.year == key.year,
            HabitCompletion.month == key.month,
            HabitCompletion.day == key.day,
        )
        return self.session.exec(statement).first()

    def completions_in_month(self, habit_id: int, year: int, month: int) -> list[HabitCompletion]:
        statement = (
            select(HabitCompletion)
            .where(
                HabitCompletion.habit_id == habit_id,
                HabitCompletion.year == year,
                HabitCompletion.month == month,
            )
            .order_by(col(HabitCompletion.day))
        )
        return list(self.session.exec(statement))

    def count_completions(self, habit_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(HabitCompletion)
            .where(HabitCompletion.habit_id == habit_id)
        )
        return self.session.exec(statement).one()

    def delete_completions(self, habit: Habit) -> None:
        """Remove every completion row of a habit."""
        statement = select(HabitCompletion).where(HabitCompletion.habit_id == habit.id)
        for row in list(self.session.exec(statement)):
            self.session.delete(row)
        self.session.flush()


# =============================================================================
# Exercises
# =============================================================================


class ExerciseRepository(OwnedRepository[Exercise]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Exercise)

    def in_month(self, user_id: int, year: int, month: int) -> list[Exercise]:
        """Exercises whose ``YYYY-MM-DD`` date falls in the month."""
        prefix = f"{year:04d}-{month:02d}-"
        statement = (
            select(Exercise)
            .where(Exercise.user_id == user_id, col(Exercise.date).startswith(prefix))
            .order_by(col(Exercise.date), col(Exercise.id))
        )
        return list(self.session.exec(statement))
