# tests/test_events.py

import logging
from datetime import date

import pytest

from lifedash.application import EventBus, log_event
from lifedash.domain.habit import HabitDayToggled
from lifedash.domain.today import TodayTasksReordered


def toggled() -> HabitDayToggled:
    return HabitDayToggled(
        user_id=1, habit_id=2, year=2025, month=6, day=10, completed=True, completed_days=1
    )


def test_listeners_receive_matching_types() -> None:
    bus = EventBus()
    everything, habits = [], []
    bus.subscribe(everything.append)
    bus.subscribe(habits.append, HabitDayToggled)

    reordered = TodayTasksReordered(user_id=1, day=date(2025, 6, 10), is_priority=False, task_ids=[3, 1])
    bus.publish_all([toggled(), reordered])

    assert [type(e) for e in everything] == [HabitDayToggled, TodayTasksReordered]
    assert [type(e) for e in habits] == [HabitDayToggled]


def test_unsubscribe_and_duplicate_subscribe() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(received.append)
    bus.subscribe(received.append)
    bus.publish(toggled())
    assert len(received) == 1

    bus.unsubscribe(received.append)
    bus.publish(toggled())
    assert len(received) == 1


def test_failing_listener_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("listener down")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    with caplog.at_level(logging.ERROR, logger="lifedash.application.events"):
        bus.publish(toggled())

    assert len(received) == 1
    assert "failed on" in caplog.text


def test_log_event_writes_info_line(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="lifedash.application.events"):
        log_event(toggled())
    assert "habit_id" in caplog.text
