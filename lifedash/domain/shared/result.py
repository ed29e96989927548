"""Result type for service operations.

Services never raise for expected failures (missing rows, rule violations).
They return ``Ok(value)`` or ``Err(DomainError)`` and let the calling
interface decide how to surface the error (HTTP status, CLI exit code).

Example usage:
    >>> from lifedash.domain.shared.errors import not_found
    >>> def find_project(project_id: int) -> Result[str, DomainError]:
    ...     if project_id != 1:
    ...         return Err(not_found("Project"))
    ...     return Ok("Write a book")
    ...
    >>> find_project(1)
    Ok(value='Write a book')
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from lifedash.domain.shared.errors import DomainError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed outcome carrying ``error``."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def expect_ok(result: Ok[T] | Err[DomainError]) -> T:
    """Return the Ok value or raise the carried error as ``DomainFailure``.

    Used at call sites where an error is a programming mistake, e.g. when
    seeding data or chaining services inside one unit of work.
    """
    if isinstance(result, Ok):
        return result.value
    raise DomainFailure(result.error)


class DomainFailure(Exception):
    """Raised by ``expect_ok`` when an ``Err`` was not expected."""

    def __init__(self, error: DomainError) -> None:
        super().__init__(error.message)
        self.error = error
