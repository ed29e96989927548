"""Project domain value objects.

Pure data, no I/O.
"""

from enum import Enum

from pydantic import BaseModel


class Impact(str, Enum):
    """Qualitative impact tier of a project.

    Independent of the single "priority project" flag.
    """

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank, High first."""
        return {Impact.HIGH: 0, Impact.MEDIUM: 1, Impact.LOW: 2}[self]


class ProgressSnapshot(BaseModel):
    """Task completion counts of one project and the derived percentage."""

    total: int
    completed: int
    progress: int

    model_config = {"frozen": True}
