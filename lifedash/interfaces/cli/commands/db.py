"""Database CLI commands."""

from typing import Optional

import typer

from lifedash.interfaces.cli.common import (
    get_services,
    print_info,
    print_success,
    user_context,
    user_option,
)

app = typer.Typer(help="Database commands")


@app.command("init")
def init() -> None:
    """Create any missing tables."""
    services = get_services()
    services.init_db()
    print_success(f"Database ready: {services.db.url}")


@app.command("seed")
def seed(user: Optional[int] = user_option) -> None:
    """Add the default values and dreams for a user who has none."""
    ctx = user_context(user)
    values, dreams = get_services().seed(ctx.user_id)
    if values == 0 and dreams == 0:
        print_info(f"User {ctx.user_id} already has values and dreams")
        return
    print_success(f"Seeded {values} values and {dreams} dreams for user {ctx.user_id}")
