"""CLI principal (Typer).

Comandos:
- `fetch`: pinta un par Source/Twin en una página HTML usando el servicio `/twin`.
- `show`: busca el gemelo localmente, sin HTTP.
- `serve`: levanta el servicio `/twin` y el frontend.
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.html_page import HtmlTwinPage
from adapters.page_renderer import export_index_html, render_index_html
from adapters.servers import serve_all
from cli import doctor
from cli.ui_components import build_deathbat_panel, build_pair_table, print_banner
from core.config import AppSettings
from core.domain.errors import DeathbatTwinError, MissingElementFailure
from core.logging_config import configure_logging
from core.services.collection import DeathbatCollection
from core.services.twin_fetcher import TwinFetcher

app = typer.Typer(no_args_is_help=True, help="Find the closest twin of a Deathbat token.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _settings(api_url: str | None = None, collection: Path | None = None) -> AppSettings:
    settings = AppSettings()
    update: dict[str, object] = {}
    if api_url:
        update["twin_api_url"] = api_url
    if collection:
        update["collection_path"] = collection
    if update:
        settings = settings.model_copy(update=update)
    configure_logging(settings.log_level)
    return settings


def _load_collection(settings: AppSettings) -> DeathbatCollection:
    try:
        return DeathbatCollection.load(settings.collection_path)
    except DeathbatTwinError as exc:
        _console.print(f"[red]Could not load collection:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


@app.command()
def fetch(
    token_id: str = typer.Argument(..., help="Token id, passed to the service as-is."),
    page: Optional[Path] = typer.Option(None, "--page", help="HTML page to fill (defaults to the built-in template)."),
    output: Path = typer.Option(Path("twin.html"), "--output", "-o", help="Where to write the rendered page."),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Override the /twin endpoint."),
) -> None:
    """Fetch a Source/Twin pair and write it into the page."""

    settings = _settings(api_url=api_url)

    try:
        html_page = HtmlTwinPage.from_path(page) if page else HtmlTwinPage.from_html(render_index_html())
    except OSError as exc:
        raise typer.BadParameter(f"cannot read {page}: {exc}", param_hint="--page") from exc

    try:
        html_page.set_token_id(token_id)
    except MissingElementFailure as exc:
        raise typer.BadParameter(str(exc), param_hint="--page") from exc

    result = asyncio.run(TwinFetcher(settings).fetch_and_render(html_page))
    html_page.write(output)

    if result is None:
        _console.print(f"[red]Lookup failed[/red] (see log). Page written to {output}")
        raise typer.Exit(code=1)

    _console.print(build_pair_table(*result))
    _console.print(f"[green]Page written to:[/green] {output}")


@app.command()
def show(
    token_id: int = typer.Argument(..., help="Token id to look up."),
    collection: Optional[Path] = typer.Option(None, "--collection", help="Path to deathbats.json."),
) -> None:
    """Look up a token and its twin in the local collection."""

    settings = _settings(collection=collection)
    deathbats = _load_collection(settings)
    try:
        source = deathbats.get(token_id)
    except DeathbatTwinError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    twin = deathbats.find_twin(source)
    _console.print(build_deathbat_panel(source, title="Source"))
    _console.print(build_deathbat_panel(twin, title="Twin"))


@app.command(name="export-page")
def export_page(
    output: Path = typer.Option(Path("index.html"), "--output", "-o", help="Where to write the empty page."),
) -> None:
    """Write the empty page template (a starting point for `fetch --page`)."""

    path = export_index_html(output_path=output)
    _console.print(f"[green]Page written to:[/green] {path}")


@app.command()
def serve(
    collection: Optional[Path] = typer.Option(None, "--collection", help="Path to deathbats.json."),
) -> None:
    """Run the /twin service and the frontend until interrupted."""

    settings = _settings(collection=collection)
    print_banner(_console)
    deathbats = _load_collection(settings)
    try:
        asyncio.run(serve_all(settings, deathbats))
    except KeyboardInterrupt:
        _console.print("[dim]Stopped.[/dim]")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
