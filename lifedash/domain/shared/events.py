"""Base domain event.

Domain events are immutable records of something that happened, e.g. a
project's progress being recalculated. Services publish them on the
application event bus; subscribers log or react to them.

Example usage:
    >>> class HabitArchived(DomainEvent):
    ...     habit_id: int
    ...
    >>> event = HabitArchived(user_id=1, habit_id=7)
    >>> print(f"Event {event.event_id} occurred at {event.timestamp}")
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event carries a unique id, a UTC timestamp, and the id of the
    user whose data changed.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    user_id: int

    model_config = {"frozen": True}

    @property
    def name(self) -> str:
        """Event class name, used in log lines."""
        return type(self).__name__
