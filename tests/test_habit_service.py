# tests/test_habit_service.py

import logging

from sqlmodel import select

from lifedash.application import Services, UserContext
from lifedash.domain.habit import HabitDayToggled
from lifedash.domain.shared import Err, ErrorKind, expect_ok
from lifedash.infrastructure.storage import HabitRepository
from lifedash.infrastructure.storage.tables import HabitCompletion
from lifedash.models import HabitCreate, HabitUpdate


def make_habit(services: Services, ctx: UserContext, **fields) -> int:
    return expect_ok(services.habits.create(ctx, HabitCreate(title="Read", **fields))).id


def row_count(services: Services, habit_id: int) -> int:
    with services.db.session() as session:
        return HabitRepository(session).count_completions(habit_id)


def test_toggle_day_twice_restores_state(services: Services, ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx, completed_days=5)

    first = expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 10))
    assert first.completed is True
    assert first.habit.completed_days == 6
    assert row_count(services, habit_id) == 1

    second = expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 10))
    assert second.completed is False
    assert second.habit.completed_days == 5
    assert row_count(services, habit_id) == 0


def test_today_flag_follows_only_todays_toggle(services: Services, ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx)

    other_day = expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 9))
    assert other_day.habit.is_completed_today is False

    today = expect_ok(services.habits.toggle_today(ctx, habit_id))
    assert (today.year, today.month, today.day) == (2025, 6, 10)
    assert today.habit.is_completed_today is True

    undone = expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 10))
    assert undone.habit.is_completed_today is False
    assert undone.habit.completed_days == 1


def test_counter_matches_rows_after_sequence(services: Services, ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx)
    for day in [1, 2, 3, 2, 5, 1, 7, 7, 8]:
        expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, day))

    habit = expect_ok(services.habits.get(ctx, habit_id))
    assert habit.completed_days == row_count(services, habit_id) == 3


def test_counter_floors_at_zero(services: Services, ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx)
    expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 1))
    expect_ok(services.habits.update(ctx, habit_id, HabitUpdate(completed_days=0)))

    status = expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 1))
    assert status.completed is False
    assert status.habit.completed_days == 0


def test_day_shape_is_validated(services: Services, ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx)
    result = services.habits.toggle_day(ctx, habit_id, 2025, 13, 1)
    assert isinstance(result, Err)
    assert result.error.kind is ErrorKind.VALIDATION
    assert services.habits.toggle_day(ctx, habit_id, 2025, 6, 32).error.kind is ErrorKind.VALIDATION
    # Calendar validity is not checked.
    expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 2, 31))


def test_completions_for_month(services: Services, ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx)
    for year, month, day in [(2025, 6, 14), (2025, 6, 2), (2025, 7, 1), (2024, 6, 2)]:
        expect_ok(services.habits.toggle_day(ctx, habit_id, year, month, day))

    completions = expect_ok(services.habits.completions(ctx, habit_id, 2025, 6))
    assert [c.day for c in completions] == [2, 14]
    assert all(c.habit_id == habit_id for c in completions)
    assert services.habits.completions(ctx, habit_id, 2025, 0).error.kind is ErrorKind.VALIDATION


def test_foreign_or_missing_habit(services: Services, ctx: UserContext, other_ctx: UserContext) -> None:
    habit_id = make_habit(services, ctx)
    result = services.habits.toggle_day(other_ctx, habit_id, 2025, 6, 10)
    assert isinstance(result, Err)
    assert result.error.message == "Habit not found"
    assert services.habits.completions(other_ctx, habit_id, 2025, 6).error.kind is ErrorKind.NOT_FOUND
    assert services.habits.toggle_today(ctx, 999).error.kind is ErrorKind.NOT_FOUND


def test_delete_habit_removes_completions(services: Services, ctx: UserContext, caplog) -> None:
    habit_id = make_habit(services, ctx)
    expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 10))
    expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 11))

    with caplog.at_level(logging.INFO, logger="lifedash.application.habit_service"):
        expect_ok(services.habits.delete(ctx, habit_id))

    assert f"Deleting habit {habit_id} with 2 completion(s)" in caplog.text

    with services.db.session() as session:
        assert session.exec(select(HabitCompletion)).all() == []


def test_toggle_publishes_event(services: Services, ctx: UserContext, events) -> None:
    habit_id = make_habit(services, ctx)
    expect_ok(services.habits.toggle_day(ctx, habit_id, 2025, 6, 10))

    toggled = [e for e in events if isinstance(e, HabitDayToggled)]
    assert len(toggled) == 1
    assert (toggled[0].habit_id, toggled[0].completed, toggled[0].completed_days) == (habit_id, True, 1)
