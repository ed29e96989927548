# tests/test_progress.py

import pytest

from lifedash.domain.project import (
    Impact,
    calculate_progress,
    normalize_ids,
    should_replace,
    snapshot,
    unknown_ids,
)


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (0, 0, 0),
        (0, 4, 0),
        (1, 4, 25),
        (2, 4, 50),
        (2, 3, 67),
        (1, 3, 33),
        (4, 4, 100),
        (1, 8, 13),
        (3, 8, 38),
        (5, 8, 63),
    ],
)
def test_calculate_progress_rounds_half_up(completed: int, total: int, expected: int) -> None:
    assert calculate_progress(completed, total) == expected


def test_calculate_progress_rejects_impossible_counts() -> None:
    with pytest.raises(ValueError):
        calculate_progress(-1, 3)
    with pytest.raises(ValueError):
        calculate_progress(4, 3)


def test_snapshot_counts_flags() -> None:
    snap = snapshot([True, False, False, False])
    assert (snap.total, snap.completed, snap.progress) == (4, 1, 25)
    assert snapshot([]).progress == 0


def test_relation_ids_are_deduplicated_in_order() -> None:
    assert normalize_ids([3, 1, 3, 2, 1]) == [3, 1, 2]
    assert unknown_ids([1, 5, 2, 9], known={1, 2}) == [5, 9]


def test_relation_replace_only_when_supplied() -> None:
    assert should_replace([]) is True
    assert should_replace([4]) is True
    assert should_replace(None) is False


def test_impact_rank_orders_high_first() -> None:
    ordered = sorted([Impact.LOW, Impact.HIGH, Impact.MEDIUM], key=lambda i: i.rank)
    assert ordered == [Impact.HIGH, Impact.MEDIUM, Impact.LOW]
    assert Impact("High") is Impact.HIGH
