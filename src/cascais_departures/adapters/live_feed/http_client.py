"""HTTP client for the live vehicle feed."""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from cascais_departures.adapters.api_request_logger import log_api_request
from cascais_departures.adapters.live_feed.constants import DEFAULT_HEADERS, VEHICLE_LIST_KEYS

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class LiveFeedHttpClient:
    """Fetches raw vehicle reports. A failed fetch yields an empty list, never an error."""

    def __init__(
        self,
        url: str,
        session: "ClientSession | None" = None,
        timeout_seconds: float = 5.0,
        verify_tls: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            url: Vehicles endpoint.
            session: Optional aiohttp ClientSession for HTTP requests.
            timeout_seconds: Total timeout for one request.
            verify_tls: Whether to verify the upstream TLS certificate.
        """
        self._url = url
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._verify_tls = verify_tls

    @staticmethod
    def _extract_vehicles(data: Any) -> list[dict[str, Any]]:
        """Extract the vehicle list from the feed payload."""
        if isinstance(data, list):
            return [v for v in data if isinstance(v, dict)]
        if isinstance(data, dict):
            for key in VEHICLE_LIST_KEYS:
                vehicles = data.get(key)
                if isinstance(vehicles, list):
                    return [v for v in vehicles if isinstance(v, dict)]
        logger.warning("Live feed returned an unexpected payload shape")
        return []

    async def _handle_response(self, response: "ClientResponse") -> list[dict[str, Any]]:
        if response.status != 200:
            response_text = await response.text()
            logger.warning(f"Live feed returned status {response.status}: {response_text[:200]}")
            return []
        data = await response.json(content_type=None)
        return self._extract_vehicles(data)

    async def fetch_vehicles(self) -> list[dict[str, Any]]:
        """Fetch the raw vehicle list.

        Returns:
            List of vehicle dictionaries, or empty list if the request failed.
        """
        if not self._session:
            return []

        log_api_request("GET", self._url, headers=DEFAULT_HEADERS)
        try:
            async with self._session.get(
                self._url,
                headers=DEFAULT_HEADERS,
                timeout=self._timeout,
                ssl=self._verify_tls,
            ) as response:
                return await self._handle_response(response)
        except TimeoutError:
            logger.warning(f"Live feed request timed out after {self._timeout.total}s")
        except (aiohttp.ClientError, ValueError) as e:
            logger.warning(f"Error fetching live feed: {e}")
        return []
