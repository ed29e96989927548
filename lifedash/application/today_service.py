"""Today-task application service.

A day's tasks live in two partitions, the capped priority list and the
regular list, each ordered by a gapless ``position``. The ordering rules
are pure functions in ``lifedash.domain.today``; this service loads the
day's rows, applies the planned slots and publishes the resulting events.
"""

import logging
from datetime import date

from lifedash.application.context import UserContext
from lifedash.application.events import EventBus
from lifedash.domain.shared import DomainError, DomainEvent, Err, Ok, Result, not_found
from lifedash.domain.today import (
    PRIORITY_CAP,
    TodayTaskPriorityChanged,
    TodayTasksReordered,
    changed,
    check_priority_capacity,
    next_position,
    plan_priority_change,
    reorder_positions,
    resequence,
    sort_partition,
    validate_reorder,
)
from lifedash.infrastructure.storage import Database, TodayTaskRepository, to_slot
from lifedash.infrastructure.storage.tables import TodayTask
from lifedash.models import TodayTaskCreate, TodayTaskRead, TodayTaskUpdate

logger = logging.getLogger(__name__)

TODAY_TASK = "Today task"


class TodayService:
    """Today tasks of one database, with a configurable priority cap."""

    def __init__(self, db: Database, bus: EventBus, *, priority_cap: int = PRIORITY_CAP) -> None:
        self.db = db
        self.bus = bus
        self.priority_cap = priority_cap

    def _move(
        self,
        repo: TodayTaskRepository,
        ctx: UserContext,
        task: TodayTask,
        desired: bool,
    ) -> Result[TodayTaskPriorityChanged | None, DomainError]:
        """Plan and apply a partition move. Writes nothing on Err."""
        assert task.id is not None
        day_rows = repo.for_day(ctx.user_id, task.date)
        planned = plan_priority_change(
            task.id,
            desired,
            [to_slot(row) for row in day_rows],
            self.priority_cap,
        )
        if isinstance(planned, Err):
            return planned
        if not planned.value:
            return Ok(None)
        repo.apply_slots(day_rows, planned.value)
        logger.debug("Today task %s moved to %s list", task.id, "priority" if desired else "regular")
        return Ok(
            TodayTaskPriorityChanged(
                user_id=ctx.user_id,
                task_id=task.id,
                day=task.date,
                is_priority=task.is_priority,
                position=task.position,
            )
        )

    def list_tasks(self, ctx: UserContext, day: date | None = None) -> list[TodayTaskRead]:
        """Tasks of one day (default: the caller's today), priority list first."""
        with self.db.session() as session:
            rows = TodayTaskRepository(session).for_day(ctx.user_id, day or ctx.today())
            return [TodayTaskRead.model_validate(row) for row in rows]

    def get_task(self, ctx: UserContext, task_id: int) -> Result[TodayTaskRead, DomainError]:
        with self.db.session() as session:
            task = TodayTaskRepository(session).get(ctx.user_id, task_id)
            if task is None:
                return Err(not_found(TODAY_TASK))
            return Ok(TodayTaskRead.model_validate(task))

    def create_task(self, ctx: UserContext, data: TodayTaskCreate) -> Result[TodayTaskRead, DomainError]:
        """Append a task to the end of its partition.

        Args:
            ctx: Caller context; supplies owner and default date.
            data: Task fields; ``date`` defaults to the caller's today.

        Returns:
            Ok(TodayTaskRead), or Err when the priority list of that day is
            already full.
        """
        day = data.date or ctx.today()
        with self.db.unit_of_work() as session:
            repo = TodayTaskRepository(session)
            slots = [to_slot(row) for row in repo.for_day(ctx.user_id, day)]
            if data.is_priority:
                capacity = check_priority_capacity(slots, self.priority_cap)
                if isinstance(capacity, Err):
                    return capacity
            task = repo.add(
                TodayTask(
                    user_id=ctx.user_id,
                    title=data.title,
                    notes=data.notes,
                    is_completed=data.is_completed,
                    is_priority=data.is_priority,
                    position=next_position(slots, data.is_priority),
                    date=day,
                )
            )
            return Ok(TodayTaskRead.model_validate(task))

    def update_task(
        self,
        ctx: UserContext,
        task_id: int,
        changes: TodayTaskUpdate,
    ) -> Result[TodayTaskRead, DomainError]:
        """Partial update; a changed ``is_priority`` goes through the partition move."""
        values = changes.changes(exclude={"is_priority"})
        events: list[DomainEvent] = []
        with self.db.unit_of_work() as session:
            repo = TodayTaskRepository(session)
            task = repo.get(ctx.user_id, task_id)
            if task is None:
                return Err(not_found(TODAY_TASK))
            if changes.is_priority is not None:
                moved = self._move(repo, ctx, task, changes.is_priority)
                if isinstance(moved, Err):
                    return moved
                if moved.value is not None:
                    events.append(moved.value)
            for name, value in values.items():
                setattr(task, name, value)
            session.add(task)
            session.flush()
            result = TodayTaskRead.model_validate(task)

        self.bus.publish_all(events)
        return Ok(result)

    def delete_task(self, ctx: UserContext, task_id: int) -> Result[None, DomainError]:
        """Delete a task and close the gap it leaves in its partition."""
        with self.db.unit_of_work() as session:
            repo = TodayTaskRepository(session)
            task = repo.get(ctx.user_id, task_id)
            if task is None:
                return Err(not_found(TODAY_TASK))
            day, is_priority = task.date, task.is_priority
            repo.delete(task)
            rest = [row for row in repo.for_day(ctx.user_id, day) if row.is_priority == is_priority]
            before = [to_slot(row) for row in rest]
            repo.apply_slots(rest, changed(before, resequence(before)))
        return Ok(None)

    def toggle_task(self, ctx: UserContext, task_id: int) -> Result[TodayTaskRead, DomainError]:
        """Flip completion; partition and position are unchanged."""
        with self.db.unit_of_work() as session:
            repo = TodayTaskRepository(session)
            task = repo.get(ctx.user_id, task_id)
            if task is None:
                return Err(not_found(TODAY_TASK))
            task.is_completed = not task.is_completed
            session.add(task)
            session.flush()
            return Ok(TodayTaskRead.model_validate(task))

    def set_priority(
        self,
        ctx: UserContext,
        task_id: int,
        is_priority: bool,
    ) -> Result[TodayTaskRead, DomainError]:
        """Move a task into or out of the priority list.

        The task goes to the end of the target list and the list it left is
        renumbered. Moving into a full priority list is rejected; setting
        the current value changes nothing.
        """
        with self.db.unit_of_work() as session:
            repo = TodayTaskRepository(session)
            task = repo.get(ctx.user_id, task_id)
            if task is None:
                return Err(not_found(TODAY_TASK))
            moved = self._move(repo, ctx, task, is_priority)
            if isinstance(moved, Err):
                return moved
            result = TodayTaskRead.model_validate(task)

        if moved.value is not None:
            self.bus.publish(moved.value)
        return Ok(result)

    def reorder(self, ctx: UserContext, task_ids: list[int]) -> Result[list[TodayTaskRead], DomainError]:
        """Set ``position = index`` for each id, all in one transaction.

        All ids must be the caller's and share one day and one partition.
        Tasks of that partition missing from the list keep their relative
        order after the listed ones.

        Returns:
            Ok(the reordered partition, in its new order).
        """
        with self.db.unit_of_work() as session:
            repo = TodayTaskRepository(session)
            rows = repo.owned_by_ids(ctx.user_id, task_ids)
            checked = validate_reorder(task_ids, [to_slot(row) for row in rows])
            if isinstance(checked, Err):
                return checked

            first = rows[0]
            day, is_priority = first.date, first.is_priority
            partition_rows = [
                row for row in repo.for_day(ctx.user_id, day) if row.is_priority == is_priority
            ]
            positions = reorder_positions(task_ids)
            unlisted = sort_partition(
                to_slot(row) for row in partition_rows if row.id not in positions
            )
            for offset, slot in enumerate(unlisted, start=len(positions)):
                positions[slot.id] = offset

            before = [to_slot(row) for row in partition_rows]
            after = [slot.model_copy(update={"position": positions[slot.id]}) for slot in before]
            repo.apply_slots(partition_rows, changed(before, after))
            ordered = sorted(partition_rows, key=lambda row: row.position)
            result = [TodayTaskRead.model_validate(row) for row in ordered]

        logger.debug(
            "Reordered %s list of %s for user %s: %s",
            "priority" if is_priority else "regular",
            day,
            ctx.user_id,
            task_ids,
        )
        self.bus.publish(
            TodayTasksReordered(
                user_id=ctx.user_id,
                day=day,
                is_priority=is_priority,
                task_ids=[row.id for row in result],
            )
        )
        return Ok(result)
