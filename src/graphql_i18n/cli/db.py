"""Database schema commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from graphql_i18n.db.engine import get_database_url
from graphql_i18n.db.migrations import downgrade_migrations, run_migrations

db_app = typer.Typer(help="Manage the translation database schema.")
console = Console()

Url = Annotated[str | None, typer.Option("--url", help="Database URL (default: $DATABASE_URL).")]


@db_app.command("migrate")
def migrate(url: Url = None) -> None:
    """Apply all migrations."""
    run_migrations(url or get_database_url())
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("downgrade")
def downgrade(
    url: Url = None,
    yes: Annotated[bool, typer.Option("--yes", help="Confirm dropping the translations table.")] = False,
) -> None:
    """Revert all migrations, dropping stored translations."""
    if not yes:
        console.print("[red]Refusing to drop translations without --yes.[/red]")
        raise typer.Exit(1)
    downgrade_migrations(url or get_database_url())
    console.print("[green]Database schema removed.[/green]")
