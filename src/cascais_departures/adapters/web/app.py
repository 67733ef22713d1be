"""Starlette application factory."""

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Route

from cascais_departures.adapters.config.app_config import AppConfig
from cascais_departures.adapters.web.cors_middleware import CorsMiddleware
from cascais_departures.adapters.web.handlers import DepartureHandlers
from cascais_departures.adapters.web.rate_limit_middleware import RateLimitMiddleware
from cascais_departures.domain.ports.departure_board import DepartureBoard
from cascais_departures.domain.ports.station_registry import StationRegistry


def create_app(board: DepartureBoard, registry: StationRegistry, config: AppConfig) -> Starlette:
    """Build the departures API.

    CORS is the outermost middleware so rate-limited responses carry CORS
    headers too.
    """
    handlers = DepartureHandlers(board, registry, overview_page_size=config.overview_page_size)
    routes = [
        Route("/trains", handlers.trains, methods=["GET"]),
        Route("/trains/overview", handlers.overview, methods=["GET"]),
        Route("/stations", handlers.stations, methods=["GET"]),
        Route("/health", handlers.health, methods=["GET"]),
    ]
    middleware = [
        Middleware(CorsMiddleware),
        Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute),
    ]
    return Starlette(routes=routes, middleware=middleware)
