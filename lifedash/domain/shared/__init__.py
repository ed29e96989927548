"""Shared domain building blocks.

- Result type for explicit error handling
- Domain error values (validation / not found)
- Base domain event

Example usage:
    >>> from lifedash.domain.shared import Ok, Err, Result, not_found
    >>>
    >>> def find_habit(habit_id: int) -> Result[dict, DomainError]:
    ...     if habit_id == 0:
    ...         return Err(not_found("Habit"))
    ...     return Ok({"id": habit_id, "title": "Read"})
"""

from lifedash.domain.shared.errors import DomainError, ErrorKind, invalid, not_found
from lifedash.domain.shared.events import DomainEvent
from lifedash.domain.shared.result import (
    DomainFailure,
    Err,
    Ok,
    Result,
    expect_ok,
)

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    "expect_ok",
    "DomainFailure",
    # Errors
    "DomainError",
    "ErrorKind",
    "invalid",
    "not_found",
    # Events
    "DomainEvent",
]
