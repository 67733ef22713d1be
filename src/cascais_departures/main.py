"""Main entry point for the Cascais line departures API."""

import asyncio
import logging
import sys

import aiohttp

from cascais_departures.adapters.config import AppConfig
from cascais_departures.adapters.web import DeparturesWebServer, create_app
from cascais_departures.bootstrap import build_components

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    # One session for all upstream calls, closed on shutdown
    async with aiohttp.ClientSession() as session:
        try:
            components = build_components(config, session=session)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Invalid line data: {e}")
            sys.exit(1)

        logger.info(
            f"Loaded {components.line.name or 'line'} with "
            f"{len(components.registry.stations())} stations "
            f"({components.registry.origin.name} - {components.registry.terminus.name})"
        )

        app = create_app(components.engine, components.registry, config)
        server = DeparturesWebServer(app, config)
        try:
            await server.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await server.stop()


if __name__ == "__main__":
    asyncio.run(main())
