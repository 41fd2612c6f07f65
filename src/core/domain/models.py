"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo `Deathbat` sirve para leer la colección en disco y para
  serializar la respuesta de `/twin`.

Nota:
- `TokenRecord` es la vista del cliente: solo los cinco campos que se pintan
  en la página. `Deathbat` es la vista completa del servicio.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_serializer
from pydantic.config import ConfigDict


OPENSEA_LABEL_PREFIX = "Opensea.io/.../"


class TokenRecord(BaseModel):
    """Un lado (Source o Twin) tal y como lo consume la página.

    Por qué todo opcional:
    - El cliente confía en la forma de la respuesta; un campo ausente se pinta
      vacío en lugar de abortar el render.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str | None = Field(default=None, description="Nombre visible del token.")
    image: str | None = Field(default=None, description="URI de la imagen.")
    owner: str | None = Field(default=None, description="Propietario actual (texto visible).")
    id: str | None = Field(default=None, description="Identificador usado en la etiqueta del enlace.")
    hyperlink: str | None = Field(default=None, description="URI del listado en el marketplace.")

    def label(self) -> str:
        """Etiqueta del enlace: `Opensea.io/.../<id>`."""

        return OPENSEA_LABEL_PREFIX + (self.id or "")


class Attribute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    trait_type: str = Field(default="", description="Tipo de rasgo (p.ej. 'Mask').")
    value: str = Field(default="", description="Valor del rasgo.")


class Traits(BaseModel):
    """Rasgos normalizados de un Deathbat (snake_case, vacío = ausente)."""

    model_config = ConfigDict(extra="ignore")

    background: str = ""
    brooks_wackerman: str = ""
    eyes: str = ""
    facial_hair: str = ""
    head: str = ""
    johnny_christ: str = ""
    mask: str = ""
    mouth: str = ""
    shadows: str = ""
    nose: str = ""
    perk: str = ""
    skin: str = ""
    synyster_gates: str = ""
    zacky_vengeance: str = ""

    def non_empty(self) -> dict[str, str]:
        return {k: v for k, v in self.model_dump().items() if v}


class Deathbat(BaseModel):
    """Token completo de la colección.

    Por qué `description: Any`:
    - En el dataset original el campo mezcla strings y null.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Token id (1..10000).")
    name: str = Field(default="", description="Nombre del token.")
    description: Any = Field(default=None, description="Descripción libre del dataset.")
    minted: bool = Field(default=False, description="Si el token ya fue minteado.")
    image: str = Field(default="", description="URI de la imagen.")
    attributes: list[Attribute] = Field(
        default_factory=list,
        description="Rasgos tal y como vienen en la metadata del token.",
    )
    traits: Traits = Field(default_factory=Traits, description="Rasgos normalizados.")
    hyperlink: str = Field(default="", description="URL del listado en OpenSea.")
    owner: str = Field(default="", description="Propietario conocido.")

    @field_serializer("traits")
    def _serialize_traits(self, traits: Traits) -> dict[str, str]:
        # Los rasgos vacíos no se emiten.
        return traits.non_empty()


class TwinResponse(BaseModel):
    """Cuerpo de `GET /twin`: `{"Source": ..., "Twin": ...}`."""

    model_config = ConfigDict(populate_by_name=True)

    source: Deathbat = Field(..., alias="Source", description="Deathbat consultado.")
    twin: Deathbat = Field(..., alias="Twin", description="Deathbat más parecido.")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
