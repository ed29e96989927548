"""Wiring of the application services.

The API and the CLI both build one ``Services`` object per process and call
into it with an explicit ``UserContext``.
"""

import logging
from dataclasses import dataclass

from lifedash.application.events import EventBus, log_event
from lifedash.application.habit_service import HabitService
from lifedash.application.project_service import ProjectService
from lifedash.application.records import (
    DateIdeaService,
    DreamService,
    ExerciseService,
    HealthMetricService,
    IdeaService,
    LearningItemService,
    ParentingTaskService,
    QuoteService,
    ValueService,
)
from lifedash.application.today_service import TodayService
from lifedash.config import Settings
from lifedash.infrastructure.storage import Database, seed_defaults

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Every service, sharing one database and one event bus."""

    settings: Settings
    db: Database
    bus: EventBus
    projects: ProjectService
    today: TodayService
    habits: HabitService
    health_metrics: HealthMetricService
    ideas: IdeaService
    learning: LearningItemService
    values: ValueService
    dreams: DreamService
    date_ideas: DateIdeaService
    parenting_tasks: ParentingTaskService
    quotes: QuoteService
    exercises: ExerciseService

    def init_db(self) -> None:
        """Create missing tables."""
        self.db.create_all()

    def seed(self, user_id: int) -> tuple[int, int]:
        """Seed default values and dreams for a user who has none.

        Returns:
            (values added, dreams added).
        """
        with self.db.unit_of_work() as session:
            return seed_defaults(session, user_id)


def build_services(settings: Settings, db: Database | None = None) -> Services:
    """Build the services for ``settings``.

    Args:
        settings: Loaded settings; supply the database URL and priority cap.
        db: Existing database to use instead of the configured URL.
    """
    db = db or Database(settings.resolved_database_url())
    bus = EventBus()
    bus.subscribe(log_event)
    logger.debug("Services bound to %s", db.url)
    return Services(
        settings=settings,
        db=db,
        bus=bus,
        projects=ProjectService(db, bus),
        today=TodayService(db, bus, priority_cap=settings.priority_cap),
        habits=HabitService(db, bus),
        health_metrics=HealthMetricService(db, bus),
        ideas=IdeaService(db, bus),
        learning=LearningItemService(db, bus),
        values=ValueService(db, bus),
        dreams=DreamService(db, bus),
        date_ideas=DateIdeaService(db, bus),
        parenting_tasks=ParentingTaskService(db, bus),
        quotes=QuoteService(db, bus),
        exercises=ExerciseService(db, bus),
    )
