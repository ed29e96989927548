"""Project domain package.

Impact tiers, progress derivation and relation-set rules for projects.
"""

from lifedash.domain.project.events import (
    PriorityProjectChanged,
    ProjectProgressRecalculated,
)
from lifedash.domain.project.models import Impact, ProgressSnapshot
from lifedash.domain.project.progress import (
    calculate_progress,
    snapshot,
)
from lifedash.domain.project.relations import normalize_ids, should_replace, unknown_ids

__all__ = [
    "Impact",
    "ProgressSnapshot",
    "calculate_progress",
    "snapshot",
    "normalize_ids",
    "unknown_ids",
    "should_replace",
    "ProjectProgressRecalculated",
    "PriorityProjectChanged",
]
