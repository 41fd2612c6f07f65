"""Contrato para resolver el propietario actual de un token."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OwnerLookup(Protocol):
    """Fuente de propietarios (OpenSea u otra).

    - `fetch_owner` es asíncrono porque típicamente hará I/O (HTTP).
    - Devuelve `None` si la fuente responde pero no trae propietario.
    - Levanta `OwnerLookupError` si la fuente falla.
    """

    async def fetch_owner(self, token_id: int) -> str | None:
        ...
