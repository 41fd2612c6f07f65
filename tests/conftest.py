"""Shared fixtures for the Deathbat Twin test suite."""

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from adapters.html_page import HtmlTwinPage
from adapters.page_renderer import render_index_html
from core.config import AppSettings
from core.domain.models import Deathbat, Traits

TWIN_API_URL = "http://localhost:6660/twin"

TARGET_IDS = (
    "source_name",
    "source_img",
    "source_owner",
    "source_hyperlink",
    "twin_name",
    "twin_img",
    "twin_owner",
    "twin_hyperlink",
)


@pytest.fixture
def sample_payload() -> dict:
    return {
        "Source": {"name": "A", "image": "a.png", "owner": "Alice", "id": "1", "hyperlink": "http://x/1"},
        "Twin": {"name": "B", "image": "b.png", "owner": "Bob", "id": "2", "hyperlink": "http://x/2"},
    }


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(twin_api_url=TWIN_API_URL, opensea_api_key=None)


@pytest.fixture
def page() -> HtmlTwinPage:
    twin_page = HtmlTwinPage.from_html(render_index_html())
    twin_page.set_token_id("1")
    return twin_page


@pytest.fixture
def json_transport() -> Callable[[object], httpx.MockTransport]:
    """Build a transport that answers every request with the given JSON body."""

    def _build(body: object, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body)

        return httpx.MockTransport(handler)

    return _build


def make_deathbat(token_id: int, **traits: str) -> Deathbat:
    return Deathbat(
        id=token_id,
        name=f"Deathbat #{token_id}",
        image=f"https://img.example/{token_id}.png",
        hyperlink=f"https://opensea.io/assets/0x1D3aDa5856B14D9dF178EA5Cab137d436dC55F1D/{token_id}",
        owner=f"owner-{token_id}",
        traits=Traits(**traits),
    )


@pytest.fixture
def collection_file(tmp_path: Path) -> Path:
    deathbats = [
        make_deathbat(1, mask="Skull", eyes="Red", background="Black"),
        make_deathbat(2, mask="Skull", background="White"),
        make_deathbat(3, eyes="Red", background="Black"),
        make_deathbat(4, shadows="M. Shadows"),
    ]
    path = tmp_path / "deathbats.json"
    path.write_text(
        json.dumps([d.model_dump(mode="json") for d in deathbats]),
        encoding="utf-8",
    )
    return path
