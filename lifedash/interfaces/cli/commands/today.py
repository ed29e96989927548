"""Today-task CLI commands.

List the day's priority and regular tasks, add and toggle tasks, move them
between the two lists and reorder a list.
"""

from datetime import datetime
from typing import Optional

import typer

from lifedash.interfaces.cli.common import (
    as_date,
    checkbox,
    exit_on_error,
    get_services,
    print_header,
    print_success,
    user_context,
    user_option,
)
from lifedash.models import TodayTaskCreate, TodayTaskRead

app = typer.Typer(help="Today task commands")

date_option = typer.Option(None, "--date", "-d", formats=["%Y-%m-%d"], help="Day (default: today)")


def _line(task: TodayTaskRead) -> str:
    notes = f"  ({task.notes})" if task.notes else ""
    return f"  {checkbox(task.is_completed)} #{task.id} {task.title}{notes}"


@app.command("list")
def list_tasks(
    day: Optional[datetime] = date_option,
    user: Optional[int] = user_option,
) -> None:
    """Show the day's priority list, then the regular list."""
    ctx = user_context(user, as_date(day))
    tasks = get_services().today.list_tasks(ctx)
    print_header(f"TODAY {ctx.today().isoformat()}")
    typer.echo("Top priorities:")
    for task in [t for t in tasks if t.is_priority]:
        typer.echo(_line(task))
    typer.echo("Other tasks:")
    for task in [t for t in tasks if not t.is_priority]:
        typer.echo(_line(task))


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Notes"),
    priority: bool = typer.Option(False, "--priority", "-p", help="Add to the priority list"),
    day: Optional[datetime] = date_option,
    user: Optional[int] = user_option,
) -> None:
    """Add a task at the end of its list."""
    ctx = user_context(user, as_date(day))
    task = exit_on_error(
        get_services().today.create_task(
            ctx, TodayTaskCreate(title=title, notes=notes, is_priority=priority)
        )
    )
    print_success(f"Added #{task.id} {task.title}")


@app.command("toggle")
def toggle(
    task_id: int = typer.Argument(..., help="Task id"),
    user: Optional[int] = user_option,
) -> None:
    """Mark a task done, or open again."""
    task = exit_on_error(get_services().today.toggle_task(user_context(user), task_id))
    print_success(f"#{task.id} {'done' if task.is_completed else 'open'}")


@app.command("priority")
def priority(
    task_id: int = typer.Argument(..., help="Task id"),
    off: bool = typer.Option(False, "--off", help="Move back to the regular list"),
    user: Optional[int] = user_option,
) -> None:
    """Move a task into (or with --off, out of) the priority list."""
    task = exit_on_error(get_services().today.set_priority(user_context(user), task_id, not off))
    where = "priority" if task.is_priority else "regular"
    print_success(f"#{task.id} is in the {where} list at position {task.position}")


@app.command("reorder")
def reorder(
    task_ids: list[int] = typer.Argument(..., help="Task ids in their new order"),
    user: Optional[int] = user_option,
) -> None:
    """Reorder one list of a day."""
    tasks = exit_on_error(get_services().today.reorder(user_context(user), task_ids))
    print_success("New order: " + ", ".join(f"#{task.id}" for task in tasks))
