"""Página HTML mutable sobre BeautifulSoup.

Por qué está en adapters:
- El parser HTML es un detalle de infraestructura; el Core solo conoce el
  contrato `core.interfaces.page.TwinPage`.
"""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup
from bs4.element import Tag

from core.domain.errors import MissingElementFailure


class HtmlTwinPage:
    """Implementa `TwinPage` sobre un documento BeautifulSoup."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html: str) -> "HtmlTwinPage":
        return cls(BeautifulSoup(html, "html.parser"))

    @classmethod
    def from_path(cls, path: Path) -> "HtmlTwinPage":
        return cls.from_html(path.read_text(encoding="utf-8"))

    def element(self, element_id: str) -> Tag:
        tag = self._soup.find(id=element_id)
        if not isinstance(tag, Tag):
            raise MissingElementFailure(element_id)
        return tag

    @property
    def token_id(self) -> str:
        value = self.element("token_id").get("value")
        if value is None:
            return ""
        return str(value)

    def set_token_id(self, value: str) -> None:
        """Simula al usuario escribiendo en el campo `token_id`."""

        self.element("token_id")["value"] = value

    def text(self, element_id: str) -> str:
        return self.element(element_id).get_text()

    def attribute(self, element_id: str, name: str) -> str | None:
        value = self.element(element_id).get(name)
        return None if value is None else str(value)

    def set_text(self, element_id: str, text: str) -> None:
        self.element(element_id).string = text

    def set_attribute(self, element_id: str, name: str, value: str) -> None:
        self.element(element_id)[name] = value

    def to_html(self) -> str:
        return str(self._soup)

    def write(self, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_html(), encoding="utf-8")
        return output_path
