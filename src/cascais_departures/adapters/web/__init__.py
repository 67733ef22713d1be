"""Web adapters for the departures API."""

from cascais_departures.adapters.web.app import create_app
from cascais_departures.adapters.web.server import DeparturesWebServer

__all__ = ["DeparturesWebServer", "create_app"]
