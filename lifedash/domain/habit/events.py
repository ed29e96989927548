"""Habit domain events."""

from lifedash.domain.shared.events import DomainEvent


class HabitDayToggled(DomainEvent):
    """Raised after a habit day was marked or unmarked as completed."""

    habit_id: int
    year: int
    month: int
    day: int
    completed: bool
    completed_days: int
