"""Propietario actual de un Deathbat vía la API de assets de OpenSea.

Estos lookups están en adapters porque son I/O puro (HTTP). El servicio
`/twin` los trata como best-effort: un fallo se registra y la respuesta
sale con el propietario guardado en la colección.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import OpenSeaUnresponsiveError, OwnerLookupError


def _owner_name(owner: Any) -> str | None:
    if not isinstance(owner, dict):
        return None
    user = owner.get("user")
    if isinstance(user, dict):
        username = user.get("username")
        if isinstance(username, str) and username.strip():
            return username.strip()
    address = owner.get("address")
    if isinstance(address, str) and address.strip():
        return address.strip()
    return None


def extract_owner(asset: Any) -> str | None:
    """Saca el propietario de un asset de OpenSea.

    Orden: `owner.user.username`, `owner.address`, y lo mismo para cada
    entrada de `top_ownerships`.
    """

    if not isinstance(asset, dict):
        return None

    name = _owner_name(asset.get("owner"))
    if name:
        return name

    for ownership in asset.get("top_ownerships") or []:
        if not isinstance(ownership, dict):
            continue
        name = _owner_name(ownership.get("owner"))
        if name:
            return name
    return None


class OpenSeaOwnerLookup:
    """Implementa `core.interfaces.owners.OwnerLookup` contra OpenSea."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def asset_url(self, token_id: int) -> str:
        return f"{self._settings.opensea_asset_api}{token_id}"

    async def fetch_owner(self, token_id: int) -> str | None:
        url = self.asset_url(token_id)
        headers: dict[str, str] = {}
        if self._settings.opensea_api_key:
            headers["X-API-KEY"] = self._settings.opensea_api_key

        try:
            async with build_async_client(
                self._settings, extra_headers=headers, transport=self._transport
            ) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise OwnerLookupError(f"fetch_owner: GET {url}: {exc}") from exc

        if resp.status_code != 200:
            raise OpenSeaUnresponsiveError(resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise OwnerLookupError(f"fetch_owner: decode {url}: {exc}") from exc

        return extract_owner(data)
