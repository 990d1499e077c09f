import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from graphql_i18n.core.i18n import I18n
from graphql_i18n.errors import I18nError
from graphql_i18n.loader import load_i18n
from graphql_i18n.models import TranslationRecord, Where, WhereUnique

translations_app = typer.Typer(help="Manage translation records.")
console = Console()

Target = Annotated[
    str | None,
    typer.Option("--target", "-t", help="I18n object as module:attribute (default: $GRAPHQL_I18N_TARGET)."),
]
Lang = Annotated[str | None, typer.Option("--lang", "-l", help="Language code (default: the default language).")]

_records_adapter = TypeAdapter(list[TranslationRecord])


def _get_i18n(target: str | None) -> I18n:
    return load_i18n(target)


def _run(target: str | None, action: Callable[[I18n], Awaitable[None]]) -> None:
    try:
        i18n = _get_i18n(target)
    except I18nError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    async def _main() -> None:
        try:
            await action(i18n)
        finally:
            await i18n.store.dispose()

    try:
        asyncio.run(_main())
    except I18nError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc


def _parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc


@translations_app.command("sync")
def sync(
    type_name: Annotated[str, typer.Argument(metavar="TYPE", help="Declared type name.")],
    record_id: Annotated[str, typer.Argument(metavar="ID", help="Record identity.")],
    data: Annotated[str, typer.Option("--data", "-d", help="Translation payload as a JSON object.")],
    lang: Lang = None,
    target: Target = None,
) -> None:
    """Create or replace one translation."""
    payload = _parse_json(data)

    async def _action(i18n: I18n) -> None:
        await i18n.sync(WhereUnique(id=record_id, type=type_name), payload, lang)
        console.print(f"[green]Synced[/green] {type_name} {record_id} ({lang or i18n.default_lang})")

    _run(target, _action)


@translations_app.command("import")
def import_records(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="JSON list of translation records.")],
    target: Target = None,
) -> None:
    """Sync every record of a JSON file: [{"type", "id", "language", "data"}, ...]."""
    try:
        records = _records_adapter.validate_json(file.read_bytes())
    except ValidationError as exc:
        console.print(f"[red]Invalid records file: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    async def _action(i18n: I18n) -> None:
        for record in records:
            await i18n.sync(WhereUnique(id=record.id, type=record.type), record.data, record.language)
        console.print(f"[green]Imported[/green] {len(records)} record(s)")

    _run(target, _action)


@translations_app.command("get")
def get(
    type_name: Annotated[str, typer.Argument(metavar="TYPE", help="Declared type name.")],
    record_id: Annotated[str, typer.Argument(metavar="ID", help="Record identity.")],
    lang: Lang = None,
    target: Target = None,
) -> None:
    """Show one translation, falling back to the default language."""

    async def _action(i18n: I18n) -> None:
        data = await i18n.find_one(WhereUnique(id=record_id, type=type_name), lang)
        if data is None:
            console.print(f"[yellow]No translation for {type_name} {record_id}[/yellow]")
            raise typer.Exit(1)
        console.print_json(data=data)

    _run(target, _action)


@translations_app.command("find")
def find(
    type_name: Annotated[str, typer.Argument(metavar="TYPE", help="Declared type name.")],
    ids: Annotated[list[str], typer.Argument(help="Record identities.")],
    lang: Lang = None,
    target: Target = None,
) -> None:
    """List translations for several ids."""

    async def _action(i18n: I18n) -> None:
        results = await i18n.find(Where(ids=ids, type=type_name), lang)
        table = Table(show_lines=False)
        table.add_column("id")
        table.add_column("data")
        for record_id in ids:
            if record_id in results:
                table.add_row(record_id, json.dumps(results[record_id], ensure_ascii=False))
        console.print(table)
        console.print(f"({len(results)} rows)")

    _run(target, _action)


@translations_app.command("delete")
def delete(
    type_name: Annotated[str, typer.Argument(metavar="TYPE", help="Declared type name.")],
    record_id: Annotated[str, typer.Argument(metavar="ID", help="Record identity.")],
    lang: Lang = None,
    target: Target = None,
) -> None:
    """Delete one translation."""

    async def _action(i18n: I18n) -> None:
        await i18n.destroy(WhereUnique(id=record_id, type=type_name), lang)
        console.print(f"[green]Deleted[/green] {type_name} {record_id} ({lang or i18n.default_lang})")

    _run(target, _action)
