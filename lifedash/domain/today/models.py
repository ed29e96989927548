"""Today-task value objects.

A day's tasks split into two partitions: the capped "Top 3" priority list
and the regular list. Each partition is ordered by ``position``.
"""

from datetime import date

from pydantic import BaseModel

# Maximum number of priority tasks per user and day.
PRIORITY_CAP = 3


class TaskSlot(BaseModel):
    """Where a today task sits: its day, partition and position."""

    id: int
    day: date
    is_priority: bool = False
    position: int = 0

    model_config = {"frozen": True}

    @property
    def partition_key(self) -> tuple[date, bool]:
        """Key identifying the partition the task belongs to."""
        return (self.day, self.is_priority)
