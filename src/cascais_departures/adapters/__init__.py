"""Adapters layer - external system integrations."""

from cascais_departures.adapters.config import AppConfig
from cascais_departures.adapters.cp_api import CpItineraryRepository
from cascais_departures.adapters.live_feed import LiveFeedPositionRepository

__all__ = [
    "AppConfig",
    "CpItineraryRepository",
    "LiveFeedPositionRepository",
]
