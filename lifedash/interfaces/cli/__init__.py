"""CLI interface for lifedash using Typer.

Usage:
    lifedash serve              # Run the HTTP API
    lifedash db init            # Create the tables
    lifedash today list         # Show today's tasks
    lifedash habit toggle 3     # Mark habit 3 done today

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (db, today, project, habit)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import Optional

import typer

from lifedash import __version__
from lifedash.config import load_settings
from lifedash.interfaces.cli.commands import db, habit, project, today
from lifedash.logging_setup import setup_logging

# Create the main Typer application
app = typer.Typer(
    name="lifedash",
    help="Personal life-management dashboard",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"lifedash version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """lifedash - projects, today's priorities, habits and more."""
    setup_logging(level="DEBUG" if verbose else "WARNING")


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(db.app, name="db")
app.add_typer(today.app, name="today")
app.add_typer(project.app, name="project")
app.add_typer(habit.app, name="habit")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = load_settings()
    setup_logging(level=settings.log_level, log_dir=settings.resolved_log_dir())
    uvicorn.run(
        "lifedash.interfaces.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


__all__ = ["app"]
