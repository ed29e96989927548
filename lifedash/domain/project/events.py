"""Project domain events.

All events are pure data structures - no I/O, no side effects.
"""

from lifedash.domain.shared.events import DomainEvent


class ProjectProgressRecalculated(DomainEvent):
    """Raised after a project's progress was derived from its tasks."""

    project_id: int
    previous: int
    progress: int
    total_tasks: int
    completed_tasks: int


class PriorityProjectChanged(DomainEvent):
    """Raised when a project becomes the caller's single priority project."""

    project_id: int
    previous_project_id: int | None = None
