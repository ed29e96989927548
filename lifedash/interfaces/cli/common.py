"""Shared utilities for lifedash CLI commands.

- Service access (one set of services per process)
- Caller context from the ``--user`` option
- Formatted output helpers (error, success, info)
- Result unwrapping with exit status 1 on errors
"""

from datetime import date, datetime
from typing import TypeVar

import typer

from lifedash.application import Services, UserContext, build_services
from lifedash.config import load_settings
from lifedash.domain.shared import DomainError, Ok, Result

T = TypeVar("T")

_services: Services | None = None

# Reusable user option for CLI commands
# Usage: def my_command(user: Optional[int] = user_option) -> None:
user_option = typer.Option(
    None,
    "--user",
    "-u",
    help="User id (or set LIFEDASH_USER env var)",
    envvar="LIFEDASH_USER",
)


def get_services() -> Services:
    """Services for this process, built from the saved settings on first use."""
    global _services
    if _services is None:
        _services = build_services(load_settings())
        _services.init_db()
    return _services


def use_services(services: Services | None) -> None:
    """Replace the process services (tests bind a temporary database)."""
    global _services
    _services = services


def user_context(user: int | None, day: date | None = None) -> UserContext:
    """Context for ``user`` (default: configured user), optionally pinned to ``day``."""
    user_id = user if user is not None else get_services().settings.default_user_id
    if day is not None:
        return UserContext.on(user_id, day)
    return UserContext(user_id=user_id)


def as_date(value: datetime | None) -> date | None:
    """Date part of a ``--date`` option parsed by Typer."""
    return value.date() if value is not None else None


def exit_on_error(result: Result[T, DomainError]) -> T:
    """Return the Ok value, or print the error and exit with status 1."""
    if isinstance(result, Ok):
        return result.value
    print_error(result.error.message)
    raise typer.Exit(1)


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message.

    Args:
        msg: Success message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_header(title: str, width: int = 60) -> None:
    """Print a title between two ``=`` separator lines."""
    typer.echo("=" * width)
    typer.echo(title)
    typer.echo("=" * width)


def checkbox(done: bool) -> str:
    return "[x]" if done else "[ ]"


__all__ = [
    "user_option",
    "get_services",
    "use_services",
    "user_context",
    "as_date",
    "exit_on_error",
    "print_error",
    "print_success",
    "print_info",
    "print_header",
    "checkbox",
]
