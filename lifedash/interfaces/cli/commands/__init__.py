"""CLI command groups for lifedash.

Command groups:
- db: Database setup (init, seed)
- today: Today tasks (list, add, toggle, priority, reorder)
- project: Projects and their tasks
- habit: Habits and the completion calendar

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from lifedash.interfaces.cli.commands import db, habit, project, today

__all__ = ["db", "today", "project", "habit"]
