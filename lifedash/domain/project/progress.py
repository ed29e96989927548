"""Project progress derivation.

Progress is the share of completed tasks, as a whole percentage rounded
half-up. All functions are pure.
"""

from collections.abc import Iterable

from .models import ProgressSnapshot


def calculate_progress(completed: int, total: int) -> int:
    """Return ``round_half_up(100 * completed / total)``, or 0 for no tasks.

    Integer arithmetic keeps ties exact: 1/8 = 12.5% rounds to 13.

    Args:
        completed: Number of completed tasks.
        total: Number of tasks.

    Returns:
        Whole percentage in [0, 100].

    Raises:
        ValueError: If the counts are negative or completed exceeds total.
    """
    if total < 0 or completed < 0:
        raise ValueError("Task counts cannot be negative")
    if completed > total:
        raise ValueError("Completed tasks cannot exceed total tasks")
    if total == 0:
        return 0
    return (200 * completed + total) // (2 * total)


def snapshot(completion_flags: Iterable[bool]) -> ProgressSnapshot:
    """Build a progress snapshot from the completion flags of a project's tasks."""
    flags = [bool(flag) for flag in completion_flags]
    completed = sum(flags)
    return ProgressSnapshot(
        total=len(flags),
        completed=completed,
        progress=calculate_progress(completed, len(flags)),
    )
