"""Cliente de `/twin`: pide un par Source/Twin y lo pinta en la página.

Flujo:
- Lee el token id crudo del campo `token_id` de la página (sin validar).
- Hace un único GET a `<twin_api_url>?token_id=<valor>` sin escapar el valor.
- Escribe cinco campos por lado, primero Source y luego Twin.

Cualquier fallo (red, status, JSON, forma, elemento ausente) se captura en
`fetch_and_render` y deja exactamente una entrada en el log de diagnóstico.
No hay reintentos, ni cancelación, ni coordinación entre llamadas
solapadas: gana la última respuesta en llegar.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import (
    FetchOrRenderFailure,
    HttpStatusFailure,
    NetworkFailure,
    ResponseParseFailure,
)
from core.domain.models import TokenRecord
from core.interfaces.page import TwinPage

logger = logging.getLogger(__name__)

# (clave en la respuesta, prefijo de los ids en la página)
SIDES: tuple[tuple[str, str], ...] = (("Source", "source"), ("Twin", "twin"))


def build_twin_url(base_url: str, token_id: str) -> str:
    """Concatena base + `?token_id=` + valor crudo."""

    return f"{base_url}?token_id={token_id}"


def _side_record(payload: Any, key: str) -> TokenRecord:
    try:
        raw = payload[key]
    except (KeyError, TypeError, IndexError) as exc:
        raise ResponseParseFailure(f"response has no {key!r} object") from exc
    try:
        return TokenRecord.model_validate(raw)
    except ValidationError as exc:
        raise ResponseParseFailure(f"{key}: {exc}") from exc


def render_record(page: TwinPage, prefix: str, record: TokenRecord) -> None:
    """Cinco escrituras para un lado, en orden fijo."""

    page.set_text(f"{prefix}_name", record.name or "")
    page.set_attribute(f"{prefix}_img", "src", record.image or "")
    page.set_text(f"{prefix}_owner", record.owner or "")
    page.set_text(f"{prefix}_hyperlink", record.label())
    page.set_attribute(f"{prefix}_hyperlink", "href", record.hyperlink or "")


def render_pair(page: TwinPage, payload: Any) -> tuple[TokenRecord, TokenRecord]:
    """Pinta Source y luego Twin.

    Cada lado se lee de la respuesta justo antes de pintarlo: si falta `Twin`,
    las escrituras de Source ya quedaron hechas cuando se levanta el error.
    """

    records: list[TokenRecord] = []
    for key, prefix in SIDES:
        record = _side_record(payload, key)
        render_record(page, prefix, record)
        records.append(record)
    return records[0], records[1]


class TwinFetcher:
    """Une el formulario de la página con el servicio de lookup."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.twin_api_url

    async def fetch(self, token_id: str) -> Any:
        """GET crudo; devuelve el JSON decodificado o levanta `FetchOrRenderFailure`."""

        url = build_twin_url(self.base_url, token_id)
        async with build_async_client(self._settings, transport=self._transport) as client:
            try:
                response = await client.get(url)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                # InvalidURL: token crudo no representable en una URL
                raise NetworkFailure(f"GET {url}: {exc}") from exc

        if not response.is_success:
            raise HttpStatusFailure(response.status_code, url)

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseParseFailure(f"GET {url}: body is not JSON ({exc})") from exc

    async def fetch_and_render(self, page: TwinPage) -> tuple[TokenRecord, TokenRecord] | None:
        """Lee `token_id`, pide el par y lo pinta.

        Devuelve los dos registros pintados, o `None` si algo falló (el fallo
        ya quedó registrado en el log).
        """

        try:
            payload = await self.fetch(page.token_id)
            return render_pair(page, payload)
        except FetchOrRenderFailure as exc:
            logger.error("twin fetch/render failed: %s", exc)
            return None
