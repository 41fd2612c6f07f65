"""Colección de Deathbats en memoria y búsqueda del gemelo.

Por qué en el Core:
- Es lógica pura sobre modelos del dominio: no hace HTTP ni toca la página.
- El servicio `/twin`, la CLI (`show`) y los tests la usan igual.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from core.domain.errors import CollectionLoadError, DeathbatNotFoundError
from core.domain.models import Deathbat


# Peso de cada rasgo coincidente al puntuar candidatos.
TRAIT_WEIGHTS: dict[str, int] = {
    "mask": 6,
    "facial_hair": 5,
    "eyes": 4,
    "mouth": 4,
    "nose": 4,
    "head": 3,
    "skin": 2,
    "background": 1,
}

# Rasgos 1/1 (miembros de la banda): un Deathbat con alguno es su propio gemelo.
ONE_OF_ONE_TRAITS: tuple[str, ...] = (
    "brooks_wackerman",
    "johnny_christ",
    "shadows",
    "synyster_gates",
    "zacky_vengeance",
)

_DEATHBATS = TypeAdapter(list[Deathbat])


def is_one_of_one(deathbat: Deathbat) -> bool:
    return any(getattr(deathbat.traits, name) for name in ONE_OF_ONE_TRAITS)


def similarity(source: Deathbat, candidate: Deathbat) -> int:
    """Suma de pesos de los rasgos no vacíos de `source` que `candidate` comparte."""

    score = 0
    for name, weight in TRAIT_WEIGHTS.items():
        value = getattr(source.traits, name)
        if value and value == getattr(candidate.traits, name):
            score += weight
    return score


def describe(deathbat: Deathbat) -> str:
    """Resumen legible de un Deathbat (CLI)."""

    traits = ", ".join(f"{a.trait_type}: {a.value}" for a in deathbat.attributes)
    return (
        f"Deathbat #{deathbat.id}\n"
        f"{traits}\n"
        f"Owner: {deathbat.owner}\n"
        f"OpenSea.io link: {deathbat.hyperlink}\n"
    )


class DeathbatCollection:
    """Todos los Deathbats cargados, en el orden del fichero."""

    def __init__(self, deathbats: Iterable[Deathbat]) -> None:
        self._items: list[Deathbat] = list(deathbats)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @classmethod
    def load(cls, path: Path) -> "DeathbatCollection":
        """Lee el JSON de la colección (lista de objetos Deathbat)."""

        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise CollectionLoadError(f"load: open {path}: {exc}") from exc
        except ValueError as exc:
            raise CollectionLoadError(f"load: parse {path}: {exc}") from exc

        try:
            return cls(_DEATHBATS.validate_python(raw))
        except ValidationError as exc:
            raise CollectionLoadError(f"load: validate {path}: {exc}") from exc

    def get(self, token_id: int) -> Deathbat:
        """Busca por id: primero por posición (fichero ordenado), luego lineal."""

        index = token_id - 1
        if 0 <= index < len(self._items) and self._items[index].id == token_id:
            return self._items[index]

        for deathbat in self._items:
            if deathbat.id == token_id:
                return deathbat

        raise DeathbatNotFoundError(token_id)

    def find_twin(self, deathbat: Deathbat) -> Deathbat:
        """Devuelve el Deathbat más parecido.

        Reglas:
        - 1/1 -> él mismo.
        - Mayor puntuación gana; a igual puntuación, el id más cercano.
        - Se parte del propio Deathbat con puntuación 0, así que sin ninguna
          coincidencia ponderada también es su propio gemelo.
        """

        twin = deathbat
        if is_one_of_one(deathbat):
            return twin

        score = 0
        for candidate in self._items:
            if candidate.id == deathbat.id:
                continue

            candidate_score = similarity(deathbat, candidate)
            if candidate_score > score:
                twin = candidate
                score = candidate_score
            elif candidate_score == score and (
                abs(deathbat.id - candidate.id) < abs(deathbat.id - twin.id)
            ):
                twin = candidate

        return twin
