"""Habit application service.

CRUD plus the per-day completion toggle. Completion rows and the
``completed_days`` counter always change together, inside one unit of work.
"""

import logging

from sqlmodel import Session

from lifedash.application.context import UserContext
from lifedash.application.record_service import RecordService
from lifedash.domain.habit import DayKey, HabitDayToggled, next_completed_days, validate_day_key
from lifedash.domain.shared import DomainError, Err, Ok, Result
from lifedash.infrastructure.storage import HabitRepository
from lifedash.infrastructure.storage.tables import Habit, HabitCompletion
from lifedash.models import HabitCompletionRead, HabitDayStatus, HabitRead

logger = logging.getLogger(__name__)


class HabitService(RecordService[Habit, HabitRead]):
    entity = "Habit"
    row_type = Habit
    read_type = HabitRead

    def _before_delete(self, session: Session, row: Habit) -> None:
        assert row.id is not None
        repo = HabitRepository(session)
        logger.info("Deleting habit %s with %s completion(s)", row.id, repo.count_completions(row.id))
        repo.delete_completions(row)

    def toggle_day(
        self,
        ctx: UserContext,
        habit_id: int,
        year: int,
        month: int,
        day: int,
    ) -> Result[HabitDayStatus, DomainError]:
        """Mark or unmark one day as completed.

        An existing completion row is removed and the counter goes down by
        one (never below zero); otherwise a row is added and the counter goes
        up by one. When the day is the caller's today, ``is_completed_today``
        follows the new state.

        Args:
            ctx: Caller context; also supplies "today".
            habit_id: Habit to toggle.
            year: Calendar year.
            month: Month, 1-12.
            day: Day of month, 1-31.

        Returns:
            Ok(HabitDayStatus) with the updated habit, or Err for an unknown
            habit or an out-of-range day.
        """
        checked = validate_day_key(year, month, day)
        if isinstance(checked, Err):
            return checked
        key = checked.value

        with self.db.unit_of_work() as session:
            repo = HabitRepository(session)
            habit = repo.get(ctx.user_id, habit_id)
            if habit is None:
                return self._missing()
            assert habit.id is not None

            existing = repo.find_completion(habit.id, key)
            completed = existing is None
            if existing is not None:
                session.delete(existing)
            else:
                session.add(HabitCompletion(habit_id=habit.id, year=key.year, month=key.month, day=key.day))

            habit.completed_days = next_completed_days(habit.completed_days, completed)
            if key.is_date(ctx.today()):
                habit.is_completed_today = completed
            session.add(habit)
            session.flush()

            status = HabitDayStatus(
                habit=self._to_read(habit),
                year=key.year,
                month=key.month,
                day=key.day,
                completed=completed,
            )

        logger.debug("Habit %s day %s -> %s", habit_id, key, "done" if completed else "open")
        self.bus.publish(
            HabitDayToggled(
                user_id=ctx.user_id,
                habit_id=habit_id,
                year=key.year,
                month=key.month,
                day=key.day,
                completed=completed,
                completed_days=status.habit.completed_days,
            )
        )
        return Ok(status)

    def toggle_today(self, ctx: UserContext, habit_id: int) -> Result[HabitDayStatus, DomainError]:
        """Toggle the caller's current date."""
        key = DayKey.from_date(ctx.today())
        return self.toggle_day(ctx, habit_id, key.year, key.month, key.day)

    def completions(
        self,
        ctx: UserContext,
        habit_id: int,
        year: int,
        month: int,
    ) -> Result[list[HabitCompletionRead], DomainError]:
        """Completion rows of one habit in one month, by day."""
        checked = validate_day_key(year, month, 1)
        if isinstance(checked, Err):
            return checked
        with self.db.session() as session:
            repo = HabitRepository(session)
            habit = repo.get(ctx.user_id, habit_id)
            if habit is None:
                return self._missing()
            assert habit.id is not None
            rows = repo.completions_in_month(habit.id, year, month)
            return Ok([HabitCompletionRead.model_validate(row) for row in rows])
