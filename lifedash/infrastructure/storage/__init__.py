"""SQLModel storage: tables, engine and repositories."""

from lifedash.infrastructure.storage.db import Database
from lifedash.infrastructure.storage.repositories import (
    ExerciseRepository,
    HabitRepository,
    OwnedRepository,
    ProjectRepository,
    TodayTaskRepository,
    to_slot,
)
from lifedash.infrastructure.storage.seed import seed_defaults

__all__ = [
    "Database",
    "OwnedRepository",
    "ProjectRepository",
    "TodayTaskRepository",
    "HabitRepository",
    "ExerciseRepository",
    "to_slot",
    "seed_defaults",
]
