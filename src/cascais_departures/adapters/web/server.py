"""Uvicorn server for the departures API."""

import logging

import uvicorn
from starlette.applications import Starlette

from cascais_departures.adapters.config.app_config import AppConfig

logger = logging.getLogger(__name__)


class DeparturesWebServer:
    """Runs the Starlette app under uvicorn until stopped."""

    def __init__(self, app: Starlette, config: AppConfig) -> None:
        self._app = app
        self._config = config
        self._server: uvicorn.Server | None = None

    async def start(self) -> None:
        """Serve until the server is asked to exit."""
        server_config = uvicorn.Config(
            self._app,
            host=self._config.host,
            port=self._config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(server_config)
        logger.info(f"Serving departures on http://{self._config.host}:{self._config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Ask the server to exit."""
        if self._server:
            self._server.should_exit = True
