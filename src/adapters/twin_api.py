"""Servicio HTTP de lookup: `GET /twin?token_id=<n>` (FastAPI).

Contrato:
- 200 + `{"Source": ..., "Twin": ...}`.
- 400 con cuerpo vacío si el token id no es entero o está fuera de rango.
- 500 con cuerpo vacío si el token no existe en la colección.
- Siempre `Access-Control-Allow-Origin: *` (la página vive en otro puerto).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from core.domain.errors import DeathbatNotFoundError, InvalidTokenIdError
from core.services.twin_service import TwinService

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def _request_uri(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def create_twin_app(service: TwinService) -> FastAPI:
    app = FastAPI(title="Deathbat Twin API", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/twin")
    async def twin(request: Request) -> Response:
        logger.info("%s %s", request.method, _request_uri(request))

        raw = request.query_params.get("token_id")
        try:
            pair = await service.lookup(raw)
        except InvalidTokenIdError as exc:
            logger.warning("twin: %s", exc)
            return Response(status_code=400, headers=CORS_HEADERS)
        except DeathbatNotFoundError as exc:
            logger.error("twin: %s", exc)
            return Response(status_code=500, headers=CORS_HEADERS)

        return JSONResponse(pair.to_payload(), headers=CORS_HEADERS)

    return app
