"""Orquestación del lookup `/twin` (lado servicio).

Valida el token id, resuelve Source y Twin en la colección y refresca el
propietario de ambos. La capa HTTP (`adapters.twin_api`) solo traduce las
excepciones de aquí a status codes.
"""

from __future__ import annotations

import logging
import re

from core.config import AppSettings
from core.domain.errors import InvalidTokenIdError, OwnerLookupError
from core.domain.models import Deathbat, TwinResponse
from core.interfaces.owners import OwnerLookup
from core.services.collection import DeathbatCollection

logger = logging.getLogger(__name__)

# Solo dígitos ASCII con signo opcional; sin espacios ni separadores.
_TOKEN_ID_RE = re.compile(r"[+-]?[0-9]+")


class TwinService:
    def __init__(
        self,
        collection: DeathbatCollection,
        owners: OwnerLookup | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._collection = collection
        self._owners = owners
        self._settings = settings or AppSettings()

    def parse_token_id(self, raw: str | None) -> int:
        """Convierte el parámetro crudo en un id dentro del rango configurado."""

        minimum, maximum = self._settings.token_id_min, self._settings.token_id_max
        if raw is None or not _TOKEN_ID_RE.fullmatch(raw):
            raise InvalidTokenIdError(raw, minimum, maximum)
        token_id = int(raw)
        if token_id < minimum or token_id > maximum:
            raise InvalidTokenIdError(token_id, minimum, maximum)
        return token_id

    async def _with_owner(self, deathbat: Deathbat) -> Deathbat:
        if self._owners is None:
            return deathbat
        try:
            owner = await self._owners.fetch_owner(deathbat.id)
        except OwnerLookupError as exc:
            logger.warning("twin: %d, %s", deathbat.id, exc)
            return deathbat
        if not owner:
            return deathbat
        return deathbat.model_copy(update={"owner": owner})

    async def lookup(self, raw_token_id: str | None) -> TwinResponse:
        """Source + Twin para un token id crudo.

        Levanta `InvalidTokenIdError` o `DeathbatNotFoundError`; los fallos de
        propietario se registran y no interrumpen la respuesta.
        """

        token_id = self.parse_token_id(raw_token_id)
        source = self._collection.get(token_id)
        twin = self._collection.find_twin(source)
        return TwinResponse(
            source=await self._with_owner(source),
            twin=await self._with_owner(twin),
        )
