"""Arranque conjunto del servicio `/twin` y del frontend (uvicorn).

Ambos servidores comparten un único event loop; si uno termina (p.ej. el
puerto está ocupado), el otro se detiene también.
"""

from __future__ import annotations

import asyncio
import logging

import uvicorn

from adapters.frontend import create_frontend_app
from adapters.opensea import OpenSeaOwnerLookup
from adapters.twin_api import create_twin_app
from core.config import AppSettings
from core.services.collection import DeathbatCollection
from core.services.twin_service import TwinService

logger = logging.getLogger(__name__)


def build_servers(settings: AppSettings, collection: DeathbatCollection) -> list[uvicorn.Server]:
    service = TwinService(collection, OpenSeaOwnerLookup(settings), settings)
    configs = [
        uvicorn.Config(
            create_twin_app(service),
            host=settings.api_host,
            port=settings.api_port,
            log_config=None,
        ),
        uvicorn.Config(
            create_frontend_app(settings),
            host=settings.api_host,
            port=settings.frontend_port,
            log_config=None,
        ),
    ]
    return [uvicorn.Server(config) for config in configs]


async def serve_all(settings: AppSettings, collection: DeathbatCollection) -> None:
    servers = build_servers(settings, collection)
    logger.info(
        "serving /twin on :%d and the page on :%d (%d Deathbats loaded)",
        settings.api_port,
        settings.frontend_port,
        len(collection),
    )
    tasks = [asyncio.create_task(server.serve()) for server in servers]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for server in servers:
            server.should_exit = True
        await asyncio.gather(*tasks, return_exceptions=True)
