"""Render de la página Source/Twin.

Por qué está en adapters:
- HTML es un detalle de infraestructura (Jinja2).
- El Core solo conoce el contrato `TwinPage`; aquí se produce el documento
  base con el formulario y los diez elementos destino vacíos.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

PAGE_TITLE = "Deathbat Twin"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_index_html(*, token_id: str = "", static_prefix: str = "/static/") -> str:
    """Renderiza la página con el campo `token_id` pre-rellenado."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    template = _get_env().get_template("index.html")
    return template.render(
        title=PAGE_TITLE,
        token_id=token_id,
        static_prefix=static_prefix,
        generated_at=generated_at,
    )


def export_index_html(*, output_path: Path, token_id: str = "") -> Path:
    """Exporta la página vacía (útil como punto de partida para `fetch --page`)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_index_html(token_id=token_id), encoding="utf-8")
    return output_path
