import typer

from graphql_i18n.cli.db import db_app
from graphql_i18n.cli.serve import serve_app
from graphql_i18n.cli.translations import translations_app

app = typer.Typer(
    name="graphql-i18n",
    help="GraphQL i18n CLI: manage translations overlaid onto GraphQL results.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")
app.add_typer(translations_app, name="translations")
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
