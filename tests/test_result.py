# tests/test_result.py

import pytest

from lifedash.domain.shared import (
    DomainFailure,
    Err,
    ErrorKind,
    Ok,
    expect_ok,
    invalid,
    not_found,
)


def test_expect_ok_raises_domain_failure() -> None:
    assert expect_ok(Ok("x")) == "x"
    with pytest.raises(DomainFailure) as info:
        expect_ok(Err(not_found("Habit")))
    assert info.value.error.kind is ErrorKind.NOT_FOUND
    assert str(info.value) == "Habit not found"


def test_error_helpers() -> None:
    assert invalid("bad").kind is ErrorKind.VALIDATION
    assert not_found("Quote").message == "Quote not found"
