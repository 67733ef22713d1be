"""Live vehicle feed adapters."""

from cascais_departures.adapters.live_feed.live_position_repository import (
    LiveFeedPositionRepository,
)

__all__ = ["LiveFeedPositionRepository"]
