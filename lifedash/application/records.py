"""Services for the flat record types.

Each is the generic CRUD service plus the few actions its record type has:
idea votes, parenting-task toggles, the single scheduled date idea and the
monthly exercise calendar.
"""

import logging
from collections import defaultdict

from sqlmodel import Session, col, select

from lifedash.application.context import UserContext
from lifedash.application.record_service import RecordService
from lifedash.domain.habit import validate_day_key
from lifedash.domain.shared import DomainError, Err, Ok, Result
from lifedash.infrastructure.storage import ExerciseRepository, ProjectRepository
from lifedash.infrastructure.storage.tables import (
    DateIdea,
    Dream,
    Exercise,
    HealthMetric,
    Idea,
    LearningItem,
    ParentingTask,
    Quote,
    Value,
)
from lifedash.models import (
    DateIdeaRead,
    DreamRead,
    ExerciseDay,
    ExerciseRead,
    HealthMetricRead,
    IdeaRead,
    LearningItemRead,
    ParentingTaskRead,
    QuoteRead,
    ValueRead,
)

logger = logging.getLogger(__name__)


class IdeaService(RecordService[Idea, IdeaRead]):
    entity = "Idea"
    row_type = Idea
    read_type = IdeaRead

    def vote(self, ctx: UserContext, idea_id: int, upvote: bool) -> Result[IdeaRead, DomainError]:
        """Add one vote, or take one away. Votes may go below zero."""
        with self.db.unit_of_work() as session:
            idea = self._repo(session).get(ctx.user_id, idea_id)
            if idea is None:
                return self._missing()
            idea.votes = (idea.votes or 0) + (1 if upvote else -1)
            session.add(idea)
            session.flush()
            return Ok(self._to_read(idea))


class LearningItemService(RecordService[LearningItem, LearningItemRead]):
    entity = "Learning item"
    row_type = LearningItem
    read_type = LearningItemRead


class ValueService(RecordService[Value, ValueRead]):
    entity = "Value"
    row_type = Value
    read_type = ValueRead

    def _before_delete(self, session: Session, row: Value) -> None:
        assert row.id is not None
        ProjectRepository(session).unlink_value(row.id)


class DreamService(RecordService[Dream, DreamRead]):
    entity = "Dream"
    row_type = Dream
    read_type = DreamRead

    def _before_delete(self, session: Session, row: Dream) -> None:
        assert row.id is not None
        ProjectRepository(session).unlink_dream(row.id)


class DateIdeaService(RecordService[DateIdea, DateIdeaRead]):
    """Date ideas; at most one per user is scheduled at a time."""

    entity = "Date idea"
    row_type = DateIdea
    read_type = DateIdeaRead

    def _before_save(self, session: Session, ctx: UserContext, row: DateIdea) -> Result[None, DomainError]:
        if not row.is_scheduled:
            return Ok(None)
        statement = select(DateIdea).where(
            DateIdea.user_id == ctx.user_id,
            col(DateIdea.is_scheduled).is_(True),
        )
        for other in list(session.exec(statement)):
            if other.id != row.id:
                other.is_scheduled = False
                session.add(other)
                logger.info("Unscheduled date idea %s in favour of %s", other.id, row.id or "new")
        return Ok(None)


class ParentingTaskService(RecordService[ParentingTask, ParentingTaskRead]):
    entity = "Parenting task"
    row_type = ParentingTask
    read_type = ParentingTaskRead

    def toggle(self, ctx: UserContext, task_id: int) -> Result[ParentingTaskRead, DomainError]:
        with self.db.unit_of_work() as session:
            task = self._repo(session).get(ctx.user_id, task_id)
            if task is None:
                return self._missing()
            task.is_completed = not task.is_completed
            session.add(task)
            session.flush()
            return Ok(self._to_read(task))


class QuoteService(RecordService[Quote, QuoteRead]):
    entity = "Quote"
    row_type = Quote
    read_type = QuoteRead


class HealthMetricService(RecordService[HealthMetric, HealthMetricRead]):
    entity = "Health metric"
    row_type = HealthMetric
    read_type = HealthMetricRead


class ExerciseService(RecordService[Exercise, ExerciseRead]):
    entity = "Exercise"
    row_type = Exercise
    read_type = ExerciseRead

    def month(self, ctx: UserContext, year: int, month: int) -> Result[list[ExerciseDay], DomainError]:
        """Exercises of one month grouped by day, days in ascending order."""
        checked = validate_day_key(year, month, 1)
        if isinstance(checked, Err):
            return checked
        with self.db.session() as session:
            rows = ExerciseRepository(session).in_month(ctx.user_id, year, month)
            by_date: dict[str, list[ExerciseRead]] = defaultdict(list)
            for row in rows:
                by_date[row.date].append(self._to_read(row))
        return Ok(
            [
                ExerciseDay(date=day, day=int(day[-2:]), exercises=exercises)
                for day, exercises in sorted(by_date.items())
            ]
        )
