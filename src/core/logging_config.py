"""Configuración de logging.

Por qué un handler de Rich en stderr:
- Es el canal de diagnóstico para desarrolladores: los fallos de fetch/render
  se registran aquí y nunca se muestran en la página.
- Mantiene la misma consola (Rich) que usa la CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Configura el root logger.

    Llamarla de nuevo reemplaza los handlers anteriores, así que CLI y
    servidores pueden invocarla sin duplicar salida.
    """

    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s", datefmt="[%X]"))
    root_logger.addHandler(handler)
