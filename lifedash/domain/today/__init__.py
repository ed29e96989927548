"""Today-task domain package.

Priority partitioning, capping and ordering of a day's tasks.
"""

from lifedash.domain.today.events import TodayTaskPriorityChanged, TodayTasksReordered
from lifedash.domain.today.models import PRIORITY_CAP, TaskSlot
from lifedash.domain.today.ordering import (
    changed,
    check_priority_capacity,
    next_position,
    partition,
    plan_priority_change,
    reorder_positions,
    resequence,
    sort_partition,
    validate_reorder,
)

__all__ = [
    "PRIORITY_CAP",
    "TaskSlot",
    "partition",
    "sort_partition",
    "resequence",
    "next_position",
    "changed",
    "check_priority_capacity",
    "plan_priority_change",
    "validate_reorder",
    "reorder_positions",
    "TodayTaskPriorityChanged",
    "TodayTasksReordered",
]
