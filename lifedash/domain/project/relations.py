"""Project to value / dream relation sets.

A relation update is one of two things: the field was absent (keep the
current rows) or the field was supplied (replace all rows, an empty list
clears them).
"""

from collections.abc import Iterable, Sequence


def normalize_ids(ids: Iterable[int]) -> list[int]:
    """Drop duplicate ids, keeping first-seen order."""
    seen: set[int] = set()
    result: list[int] = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def unknown_ids(requested: Sequence[int], known: Iterable[int]) -> list[int]:
    """Return requested ids that are not in ``known``, in request order."""
    known_set = set(known)
    return [item for item in requested if item not in known_set]


def should_replace(ids: Sequence[int] | None) -> bool:
    """True when a relation set was supplied (possibly empty)."""
    return ids is not None
