"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `fetch` y `show`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Deathbat, TokenRecord
from core.services.collection import describe


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("DEATHBAT TWIN", style="bold red")
    subtitle = Text("Source • Twin • OpenSea", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="red", padding=(1, 4)))


def build_pair_table(source: TokenRecord, twin: TokenRecord) -> Table:
    """Tabla con los cinco campos pintados de cada lado."""

    table = Table(title="Source / Twin")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Source", style="white")
    table.add_column("Twin", style="white")

    table.add_row("Name", source.name or "", twin.name or "")
    table.add_row("Image", source.image or "", twin.image or "")
    table.add_row("Owner", source.owner or "", twin.owner or "")
    table.add_row("Label", source.label(), twin.label())
    table.add_row("Link", source.hyperlink or "", twin.hyperlink or "", style="magenta")
    return table


def build_deathbat_panel(deathbat: Deathbat, *, title: str) -> Panel:
    return Panel(Text(describe(deathbat).rstrip()), title=Text(title, style="bold"), border_style="red")
