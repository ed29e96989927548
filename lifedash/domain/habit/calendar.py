"""Habit completion calendar.

Completions are keyed by plain (year, month, day) integers so that no
timezone conversion can move a completion to a neighbouring day.
"""

from dataclasses import dataclass
from datetime import date

from lifedash.domain.shared import DomainError, Err, Ok, Result, invalid


@dataclass(frozen=True)
class DayKey:
    """A calendar day as three integers.

    Only the shape is checked (month 1-12, day 1-31). A tuple such as
    (2025, 2, 31) is accepted and stored as given.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> "DayKey":
        return cls(year=value.year, month=value.month, day=value.day)

    def is_date(self, value: date) -> bool:
        """True if this key names ``value``."""
        return (self.year, self.month, self.day) == (value.year, value.month, value.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def validate_day_key(year: int, month: int, day: int) -> Result[DayKey, DomainError]:
    """Build a ``DayKey`` after the shape checks."""
    if year < 1:
        return Err(invalid("year must be positive"))
    if not 1 <= month <= 12:
        return Err(invalid("month must be between 1 and 12"))
    if not 1 <= day <= 31:
        return Err(invalid("day must be between 1 and 31"))
    return Ok(DayKey(year=year, month=month, day=day))


def next_completed_days(current: int, adding: bool) -> int:
    """Counter after one toggle: +1 when adding, -1 (floor 0) when removing."""
    if adding:
        return current + 1
    return max(0, current - 1)
