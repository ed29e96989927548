"""Habit domain package.

Per-day completion keys and the completed-days counter rules.
"""

from lifedash.domain.habit.calendar import (
    DayKey,
    next_completed_days,
    validate_day_key,
)
from lifedash.domain.habit.events import HabitDayToggled

__all__ = [
    "DayKey",
    "validate_day_key",
    "next_completed_days",
    "HabitDayToggled",
]
