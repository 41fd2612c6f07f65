"""Frontend: sirve la página y `/static/`.

Por qué el render ocurre en el servidor:
- El formulario envía `token_id` a `/`; el frontend rellena el campo, ejecuta
  `TwinFetcher.fetch_and_render` sobre la página y devuelve el HTML pintado.
- Un fallo del lookup solo deja rastro en el log; la página vuelve con los
  destinos vacíos.
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from adapters.html_page import HtmlTwinPage
from adapters.page_renderer import STATIC_DIR, render_index_html
from core.config import AppSettings
from core.services.twin_fetcher import TwinFetcher


def create_frontend_app(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or AppSettings()
    fetcher = TwinFetcher(settings, transport=transport)

    app = FastAPI(title="Deathbat Twin", docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/", response_class=HTMLResponse)
    async def home(token_id: str | None = None) -> HTMLResponse:
        page = HtmlTwinPage.from_html(render_index_html(token_id=token_id or ""))
        if token_id is not None:
            await fetcher.fetch_and_render(page)
        return HTMLResponse(page.to_html())

    return app
