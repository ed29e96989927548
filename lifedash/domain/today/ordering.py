"""Priority partitioning and ordering of today tasks.

Pure functions over ``TaskSlot`` values. They compute the new slots; the
application layer writes them back inside one unit of work.
"""

from collections.abc import Iterable, Sequence

from lifedash.domain.shared import DomainError, Err, Ok, Result, invalid, not_found

from .models import PRIORITY_CAP, TaskSlot


def sort_partition(slots: Iterable[TaskSlot]) -> list[TaskSlot]:
    """Order slots by position, ties broken by id (creation order)."""
    return sorted(slots, key=lambda slot: (slot.position, slot.id))


def partition(slots: Iterable[TaskSlot]) -> tuple[list[TaskSlot], list[TaskSlot]]:
    """Split a day's slots into (priority, regular), each sorted by position."""
    items = list(slots)
    priority = sort_partition(s for s in items if s.is_priority)
    regular = sort_partition(s for s in items if not s.is_priority)
    return priority, regular


def resequence(slots: Iterable[TaskSlot]) -> list[TaskSlot]:
    """Renumber one partition to positions 0..n-1, keeping its order."""
    return [
        slot.model_copy(update={"position": index})
        for index, slot in enumerate(sort_partition(slots))
    ]


def next_position(slots: Iterable[TaskSlot], is_priority: bool) -> int:
    """Position for a task appended at the end of a partition."""
    positions = [s.position for s in slots if s.is_priority == is_priority]
    return max(positions) + 1 if positions else 0


def check_priority_capacity(
    slots: Iterable[TaskSlot],
    cap: int = PRIORITY_CAP,
) -> Result[None, DomainError]:
    """Fail when the priority partition of a day is already full."""
    count = sum(1 for s in slots if s.is_priority)
    if count >= cap:
        return Err(invalid(f"At most {cap} priority tasks are allowed per day"))
    return Ok(None)


def changed(before: Iterable[TaskSlot], after: Iterable[TaskSlot]) -> list[TaskSlot]:
    """Return the slots of ``after`` that differ from ``before``."""
    previous = {slot.id: slot for slot in before}
    return [slot for slot in after if previous.get(slot.id) != slot]


def plan_priority_change(
    task_id: int,
    desired: bool,
    day_slots: Sequence[TaskSlot],
    cap: int = PRIORITY_CAP,
) -> Result[list[TaskSlot], DomainError]:
    """Move a task between the priority and regular partitions of its day.

    The task is appended to the end of the target partition and the source
    partition is renumbered so it stays gapless.

    Args:
        task_id: Task to move.
        desired: Target priority flag.
        day_slots: Every slot of the task's user and day.
        cap: Maximum size of the priority partition.

    Returns:
        Ok(list of slots whose flag or position changed), empty when the
        task already has the desired flag. Err when the task is missing or
        the priority partition is full.
    """
    task = next((s for s in day_slots if s.id == task_id), None)
    if task is None:
        return Err(not_found("Today task"))
    if task.is_priority == desired:
        return Ok([])

    others = [s for s in day_slots if s.id != task_id]
    if desired:
        capacity = check_priority_capacity(others, cap)
        if isinstance(capacity, Err):
            return capacity

    moved = task.model_copy(
        update={"is_priority": desired, "position": next_position(others, desired)}
    )
    source = resequence(s for s in others if s.is_priority == task.is_priority)
    return Ok([moved, *changed(day_slots, source)])


def validate_reorder(
    task_ids: Sequence[int],
    slots: Sequence[TaskSlot],
) -> Result[None, DomainError]:
    """Check a reorder request against the caller's slots.

    Every id must be known, and all ids must share one day and one
    partition, with no duplicates.

    Args:
        task_ids: Requested order.
        slots: Caller-owned slots for the requested ids.
    """
    if not task_ids:
        return Err(invalid("taskIds must not be empty"))
    if len(set(task_ids)) != len(task_ids):
        return Err(invalid("taskIds must not contain duplicates"))

    by_id = {slot.id: slot for slot in slots}
    missing = [task_id for task_id in task_ids if task_id not in by_id]
    if missing:
        return Err(not_found("Today task"))

    keys = {by_id[task_id].partition_key for task_id in task_ids}
    if len(keys) > 1:
        return Err(invalid("taskIds must all belong to the same day and list"))
    return Ok(None)


def reorder_positions(task_ids: Sequence[int]) -> dict[int, int]:
    """Map each id to its index in the requested order."""
    return {task_id: index for index, task_id in enumerate(task_ids)}
