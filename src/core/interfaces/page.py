"""Contrato de la página que pinta el par Source/Twin.

Por qué Protocol:
- El render recibe un handle explícito de la página en lugar de buscar
  elementos globales por id.
- Permite pintar sobre BeautifulSoup hoy y sobre otra representación mañana
  sin tocar `TwinFetcher`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TwinPage(Protocol):
    """Contrato mínimo de una página con el formulario y los diez destinos.

    Reglas de diseño:
    - Los elementos ya existen; nada aquí los crea.
    - Un id inexistente levanta `MissingElementFailure`.
    """

    @property
    def token_id(self) -> str:
        """Valor actual del campo `token_id`, sin validar."""

        ...

    def set_text(self, element_id: str, text: str) -> None:
        ...

    def set_attribute(self, element_id: str, name: str, value: str) -> None:
        ...
