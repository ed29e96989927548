"""Project CLI commands."""

from typing import Optional

import typer

from lifedash.interfaces.cli.common import (
    checkbox,
    exit_on_error,
    get_services,
    print_header,
    print_info,
    print_success,
    user_context,
    user_option,
)
from lifedash.models import ProjectTaskCreate

app = typer.Typer(help="Project commands")


@app.command("list")
def list_projects(
    archived: bool = typer.Option(False, "--archived", "-a", help="Include archived projects"),
    user: Optional[int] = user_option,
) -> None:
    """Show projects with their progress."""
    projects = get_services().projects.list_projects(user_context(user), show_archived=archived)
    if not projects:
        print_info("No projects yet")
        return
    print_header("PROJECTS")
    for project in projects:
        flags = []
        if project.is_priority:
            flags.append("priority")
        if project.is_archived:
            flags.append("archived")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        typer.echo(f"#{project.id} {project.title} {project.progress:>3}% {project.impact}{suffix}")


@app.command("tasks")
def tasks(
    project_id: int = typer.Argument(..., help="Project id"),
    user: Optional[int] = user_option,
) -> None:
    """Show a project's tasks."""
    ctx = user_context(user)
    services = get_services()
    project = exit_on_error(services.projects.get_project(ctx, project_id))
    items = exit_on_error(services.projects.list_tasks(ctx, project_id))
    print_header(f"{project.title} ({project.progress}%)")
    for task in items:
        typer.echo(f"  {checkbox(task.is_completed)} #{task.id} {task.title}")


@app.command("add-task")
def add_task(
    project_id: int = typer.Argument(..., help="Project id"),
    title: str = typer.Argument(..., help="Task title"),
    user: Optional[int] = user_option,
) -> None:
    """Add a task to a project."""
    ctx = user_context(user)
    services = get_services()
    task = exit_on_error(services.projects.add_task(ctx, project_id, ProjectTaskCreate(title=title)))
    project = exit_on_error(services.projects.get_project(ctx, project_id))
    print_success(f"Added #{task.id} {task.title}; progress {project.progress}%")


@app.command("toggle-task")
def toggle_task(
    task_id: int = typer.Argument(..., help="Project task id"),
    user: Optional[int] = user_option,
) -> None:
    """Mark a project task done, or open again."""
    ctx = user_context(user)
    services = get_services()
    task = exit_on_error(services.projects.toggle_task(ctx, task_id))
    project = exit_on_error(services.projects.get_project(ctx, task.project_id))
    state = "done" if task.is_completed else "open"
    print_success(f"#{task.id} {state}; progress {project.progress}%")
