"""Errores del dominio.

Dos familias:
- `FetchOrRenderFailure` y subclases: lado cliente. `TwinFetcher` las captura
  todas juntas en el nivel superior y deja una sola entrada de log.
- `DeathbatTwinError` y subclases: lado servicio (colección, OpenSea).
"""

from __future__ import annotations


class FetchOrRenderFailure(Exception):
    """Fallo al pedir o pintar un par Source/Twin."""


class NetworkFailure(FetchOrRenderFailure):
    """El transporte HTTP falló (conexión, DNS, timeout...)."""


class HttpStatusFailure(FetchOrRenderFailure):
    """El servicio respondió con un status no exitoso."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class ResponseParseFailure(FetchOrRenderFailure):
    """El cuerpo no es JSON o no tiene la forma esperada."""


class MissingElementFailure(FetchOrRenderFailure):
    """La página no contiene el elemento destino."""

    def __init__(self, element_id: str) -> None:
        super().__init__(f"element not found: #{element_id}")
        self.element_id = element_id


class DeathbatTwinError(Exception):
    """Base de errores del servicio de lookup."""


class InvalidTokenIdError(DeathbatTwinError):
    def __init__(self, raw: object, minimum: int = 1, maximum: int = 10_000) -> None:
        super().__init__(
            f"{raw!r}: invalid token id, must be between {minimum} and {maximum} inclusive"
        )
        self.raw = raw


class DeathbatNotFoundError(DeathbatTwinError):
    def __init__(self, token_id: int) -> None:
        super().__init__(f"Deathbat not found: {token_id}")
        self.token_id = token_id


class CollectionLoadError(DeathbatTwinError):
    """No se pudo leer o validar el JSON de la colección."""


class OwnerLookupError(DeathbatTwinError):
    """No se pudo obtener el propietario desde OpenSea."""


class OpenSeaUnresponsiveError(OwnerLookupError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"opensea.io unresponsive (HTTP {status_code})")
        self.status_code = status_code
