"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import CollectionLoadError
from core.services.collection import DeathbatCollection

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


def _check_collection(settings: AppSettings) -> tuple[bool, str]:
    try:
        collection = DeathbatCollection.load(settings.collection_path)
    except CollectionLoadError as exc:
        return False, str(exc)
    return True, f"{len(collection)} Deathbats in {settings.collection_path}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings().model_copy(update={"http_timeout_seconds": 5.0})

    table = Table(title="Deathbat Twin Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_collection, detail_collection = _check_collection(settings)
    table.add_row("Collection", "OK" if ok_collection else "FAIL", escape(detail_collection))

    # Lookup service: token 1 is always in range
    ok_api, detail_api = asyncio.run(_check_http(f"{settings.twin_api_url}?token_id=1", settings))
    table.add_row("Twin API", "OK" if ok_api else "FAIL", escape(detail_api))

    if settings.opensea_api_key:
        table.add_row("OpenSea key", "OK", "Owner lookups authenticated")
    else:
        table.add_row("OpenSea key", "OPTIONAL", "No key set -> owner lookups may be rejected")

    _console.print(table)

    if not ok_api:
        _console.print("\n[yellow]Note:[/yellow] start the service with `deathbat-twin serve`.")


@app.command(name="setup-opensea")
def setup_opensea() -> None:
    """Store the OpenSea API key in the user config .env."""

    api_key = typer.prompt("OpenSea API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = write_user_env_vars({"DEATHBAT_TWIN_OPENSEA_API_KEY": api_key})
    _console.print(f"[green]Saved OpenSea config to:[/green] {env_path}")
