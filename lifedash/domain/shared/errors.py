"""Domain error values.

Only two kinds of expected failure exist: the request is invalid, or the
record it refers to does not exist for the caller. Everything else is an
unexpected failure and propagates as an exception.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kind of an expected failure."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class DomainError:
    """An expected failure with a human-readable message."""

    kind: ErrorKind
    message: str


def invalid(message: str) -> DomainError:
    """Build a validation error."""
    return DomainError(ErrorKind.VALIDATION, message)


def not_found(entity: str) -> DomainError:
    """Build a not-found error for ``entity`` (e.g. ``"Project"``)."""
    return DomainError(ErrorKind.NOT_FOUND, f"{entity} not found")
