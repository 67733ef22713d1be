"""Constants for the CP timetable API adapter.

The gateway's routing and authentication are undocumented, so the client
walks an ordered list of request templates (endpoint x header set x method)
and keeps the first one that answers with usable records. New endpoints are
added here, not in the client.
"""

from dataclasses import dataclass

CP_API_BASE_URL = "https://api-gateway.cp.pt"


@dataclass(frozen=True)
class Endpoint:
    """An API path template.

    Placeholders: {from_id}, {to_id} (timetable-API ids), {station_id} (the
    departure station's user-facing id), {date} (YYYY-MM-DD), {time} (HH:MM).
    """

    path: str
    search_like: bool = False  # Search endpoints are tried with GET, then POST


@dataclass(frozen=True)
class RequestTemplate:
    """One concrete request to try."""

    method: str
    path: str
    header_set: str


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("/cp/services/travel-api/stations/{station_id}/timetable/{date}?start={time}"),
    Endpoint(
        "/cp/services/travel-api/itinerary?from={from_id}&to={to_id}&date={date}",
        search_like=True,
    ),
    Endpoint(
        "/cp/services/travel-api/v2/itinerary?from={from_id}&to={to_id}&date={date}",
        search_like=True,
    ),
    Endpoint(
        "/cp/services/travel-api/v1/itinerary?from={from_id}&to={to_id}&date={date}",
        search_like=True,
    ),
    Endpoint(
        "/cp/services/travel-api/search?from={from_id}&to={to_id}&date={date}",
        search_like=True,
    ),
    Endpoint(
        "/cp/services/travel-api/v2/search?from={from_id}&to={to_id}&date={date}",
        search_like=True,
    ),
    Endpoint("/cp/services/travel-api/trains?from={from_id}&to={to_id}&date={date}"),
    Endpoint("/cp/services/travel-api/v2/trains?from={from_id}&to={to_id}&date={date}"),
    Endpoint("/cp/services/stations-api/stations/{from_id}/next-trains"),
    Endpoint("/cp/services/stations-api/v2/stations/{from_id}/next-trains"),
    Endpoint("/cp/services/stations-api/v1/stations/{from_id}/next-trains"),
    Endpoint("/cp/services/stations-api/stations/{from_id}/departures"),
)

# Header sets, tried in this order. Credentials are added by the client.
HEADER_SETS: dict[str, dict[str, str]] = {
    "web": {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
        "Origin": "https://www.cp.pt",
        "Referer": "https://www.cp.pt/",
        "X-Requested-With": "XMLHttpRequest",
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
    },
    "mobile": {
        "Accept": "application/json",
        "User-Agent": "CP/3.4.0 (Android)",
    },
}

# Keys (or nested key paths) under which known response shapes carry their records
RECORD_LIST_PATHS: tuple[tuple[str, ...], ...] = (
    ("stationStops",),
    ("itineraries",),
    ("data", "itineraries"),
    ("trains",),
    ("nextTrains",),
)


def build_request_templates(
    endpoints: tuple[Endpoint, ...] = ENDPOINTS,
    header_sets: tuple[str, ...] = tuple(HEADER_SETS),
) -> tuple[RequestTemplate, ...]:
    """Expand endpoints and header sets into the ordered request list."""
    templates: list[RequestTemplate] = []
    for header_set in header_sets:
        for endpoint in endpoints:
            templates.append(RequestTemplate("GET", endpoint.path, header_set))
            if endpoint.search_like:
                templates.append(RequestTemplate("POST", endpoint.path, header_set))
    return tuple(templates)


REQUEST_TEMPLATES = build_request_templates()
