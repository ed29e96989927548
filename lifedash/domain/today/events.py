"""Today-task domain events."""

from datetime import date

from lifedash.domain.shared.events import DomainEvent


class TodayTaskPriorityChanged(DomainEvent):
    """Raised when a task moves between the priority and regular lists."""

    task_id: int
    day: date
    is_priority: bool
    position: int


class TodayTasksReordered(DomainEvent):
    """Raised after a partition of a day's tasks was reordered."""

    day: date
    is_priority: bool
    task_ids: list[int]
