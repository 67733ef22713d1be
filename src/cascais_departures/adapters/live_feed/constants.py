"""Constants for the live vehicle feed adapter."""

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0 (compatible; cascais-departures)",
}

# Keys under which the feed may wrap its vehicle list
VEHICLE_LIST_KEYS = ("vehicles", "data")
