"""Habit CLI commands."""

import calendar
from datetime import datetime
from typing import Optional

import typer

from lifedash.interfaces.cli.common import (
    as_date,
    exit_on_error,
    get_services,
    print_header,
    print_info,
    print_success,
    user_context,
    user_option,
)

app = typer.Typer(help="Habit commands")


@app.command("list")
def list_habits(user: Optional[int] = user_option) -> None:
    """Show habits with their counters."""
    habits = get_services().habits.list(user_context(user))
    if not habits:
        print_info("No habits yet")
        return
    for habit in habits:
        today = "done today" if habit.is_completed_today else "open today"
        typer.echo(f"#{habit.id} {habit.title}: {habit.completed_days}/{habit.target_days} ({today})")


@app.command("toggle")
def toggle(
    habit_id: int = typer.Argument(..., help="Habit id"),
    day: Optional[datetime] = typer.Option(
        None, "--date", "-d", formats=["%Y-%m-%d"], help="Day (default: today)"
    ),
    user: Optional[int] = user_option,
) -> None:
    """Mark or unmark a day as completed."""
    ctx = user_context(user)
    services = get_services()
    target = as_date(day)
    if target is None:
        status = exit_on_error(services.habits.toggle_today(ctx, habit_id))
    else:
        status = exit_on_error(
            services.habits.toggle_day(ctx, habit_id, target.year, target.month, target.day)
        )
    state = "completed" if status.completed else "cleared"
    print_success(
        f"{status.habit.title}: {status.year:04d}-{status.month:02d}-{status.day:02d} {state} "
        f"({status.habit.completed_days} days)"
    )


@app.command("calendar")
def show_calendar(
    habit_id: int = typer.Argument(..., help="Habit id"),
    year: Optional[int] = typer.Option(None, "--year", help="Year (default: this year)"),
    month: Optional[int] = typer.Option(None, "--month", help="Month (default: this month)"),
    user: Optional[int] = user_option,
) -> None:
    """Show one month with completed days marked."""
    ctx = user_context(user)
    today = ctx.today()
    year = year or today.year
    month = month or today.month
    services = get_services()
    habit = exit_on_error(services.habits.get(ctx, habit_id))
    completions = exit_on_error(services.habits.completions(ctx, habit_id, year, month))
    done = {completion.day for completion in completions}

    print_header(f"{habit.title} {year:04d}-{month:02d}")
    typer.echo("Mo Tu We Th Fr Sa Su")
    for week in calendar.monthcalendar(year, month):
        cells = []
        for day in week:
            if day == 0:
                cells.append("  ")
            elif day in done:
                cells.append(" X")
            else:
                cells.append(f"{day:2d}")
        typer.echo(" ".join(cells))
    typer.echo(f"{len(done)} day(s) completed")
