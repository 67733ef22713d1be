"""Next-train departures for the Cascais commuter rail line."""

__version__ = "0.1.0"
