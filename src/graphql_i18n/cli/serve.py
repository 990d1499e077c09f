from typing import Annotated

import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
    target: Annotated[
        str | None,
        typer.Option("--target", "-t", help="I18n object as module:attribute (default: $GRAPHQL_I18N_TARGET)."),
    ] = None,
) -> None:
    """Start the translation management API server."""
    import uvicorn

    from graphql_i18n.api.app import create_app
    from graphql_i18n.loader import load_i18n

    app = create_app(load_i18n(target))
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)
