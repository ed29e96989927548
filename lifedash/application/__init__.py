"""Application service layer for lifedash.

Services orchestrate domain rules and storage. Every operation takes an
explicit ``UserContext`` and returns a ``Result``; expected failures are
``Err(DomainError)`` values, never exceptions.

Services:
    project_service - projects, project tasks, progress and relations
    today_service - today tasks, priority list and ordering
    habit_service - habits and the per-day completion calendar
    records - ideas, learning, values, dreams, family and exercise records

Example usage:
    >>> from lifedash.application import UserContext, build_services
    >>> from lifedash.config import load_settings
    >>> services = build_services(load_settings())
    >>> services.init_db()
    >>> ctx = UserContext(user_id=1)
    >>> tasks = services.today.list_tasks(ctx)
"""

from lifedash.application.context import UserContext
from lifedash.application.events import EventBus, log_event
from lifedash.application.habit_service import HabitService
from lifedash.application.project_service import ProjectService
from lifedash.application.record_service import RecordService
from lifedash.application.services import Services, build_services
from lifedash.application.today_service import TodayService

__all__ = [
    "UserContext",
    "EventBus",
    "log_event",
    "RecordService",
    "ProjectService",
    "TodayService",
    "HabitService",
    "Services",
    "build_services",
]
