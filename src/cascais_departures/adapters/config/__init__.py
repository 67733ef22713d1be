"""Configuration adapters."""

from cascais_departures.adapters.config.app_config import AppConfig
from cascais_departures.adapters.config.line_data_loader import LineData, LineDataLoader

__all__ = ["AppConfig", "LineData", "LineDataLoader"]
