"""Request/Response schemas for the lifedash API.

Bodies of the action endpoints and the small service responses. Record
shapes are the ``*Create`` / ``*Update`` / ``*Read`` models of
``lifedash.models``.
"""

from lifedash.models import CamelModel


# =============================================================================
# Action requests
# =============================================================================


class VoteRequest(CamelModel):
    """Body of ``POST /ideas/{id}/vote``."""

    upvote: bool


class PriorityRequest(CamelModel):
    """Body of ``POST /today-tasks/{id}/priority``."""

    is_priority: bool


class ReorderRequest(CamelModel):
    """Body of ``POST /today-tasks/reorder``: ids in their new order."""

    task_ids: list[int]


class HabitDayRequest(CamelModel):
    """Body of ``POST /habits/{id}/toggle-day``."""

    year: int
    month: int
    day: int


# =============================================================================
# Service responses
# =============================================================================


class ErrorResponse(CamelModel):
    message: str


class HealthResponse(CamelModel):
    status: str
    version: str


class RootResponse(CamelModel):
    name: str
    version: str
