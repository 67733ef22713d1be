"""HTTP client for the CP timetable API gateway."""

import logging
from collections.abc import AsyncIterator
from datetime import date
from typing import TYPE_CHECKING, Any

import aiohttp

from cascais_departures.adapters.api_request_logger import log_api_request
from cascais_departures.adapters.cp_api.constants import (
    CP_API_BASE_URL,
    HEADER_SETS,
    REQUEST_TEMPLATES,
    RequestTemplate,
)
from cascais_departures.domain.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class CpHttpClient:
    """Walks the timetable API request templates, yielding each JSON answer."""

    def __init__(
        self,
        session: "ClientSession | None" = None,
        base_url: str = CP_API_BASE_URL,
        api_key: str | None = None,
        connect_id: str | None = None,
        connect_secret: str | None = None,
        timeout_seconds: float = 5.0,
        verify_tls: bool = False,
        templates: tuple[RequestTemplate, ...] = REQUEST_TEMPLATES,
    ) -> None:
        """Initialize the client.

        Args:
            session: Optional aiohttp ClientSession for HTTP requests.
            base_url: Gateway base URL.
            api_key: Optional x-api-key header value.
            connect_id: Optional x-cp-connect-id header value.
            connect_secret: Optional x-cp-connect-secret header value.
            timeout_seconds: Total timeout for each request.
            verify_tls: Whether to verify the gateway's TLS certificate.
            templates: Ordered request templates to try.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._credentials = {
            name: value
            for name, value in (
                ("x-api-key", api_key),
                ("x-cp-connect-id", connect_id),
                ("x-cp-connect-secret", connect_secret),
            )
            if value
        }
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._verify_tls = verify_tls
        self._templates = templates

    def _headers_for(self, header_set: str) -> dict[str, str]:
        return {**HEADER_SETS.get(header_set, {}), **self._credentials}

    def _url_for(
        self,
        template: RequestTemplate,
        from_id: str,
        to_id: str,
        day: date,
        start_time: str,
        station_id: str | None = None,
    ) -> str:
        path = template.path.format(
            from_id=from_id,
            to_id=to_id,
            station_id=station_id or from_id,
            date=day.isoformat(),
            time=start_time,
        )
        return f"{self._base_url}{path}"

    async def _log_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log error response details."""
        error_text = await response.text()
        error_body = error_text[:200] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.warning(
            f"CP API returned status {response.status} for {url}: "
            f"{error_body} (Content-Type: {content_type})"
        )

    async def _try_template(
        self, template: RequestTemplate, url: str, payload: dict[str, str] | None
    ) -> Any | None:
        """Send one request.

        Returns the JSON body on success, None for 401 and 404.

        Raises:
            UpstreamUnavailableError: For any other non-2xx status.
        """
        if not self._session:
            return None

        headers = self._headers_for(template.header_set)
        log_api_request(template.method, url, headers=headers, payload=payload)
        async with self._session.request(
            template.method,
            url,
            headers=headers,
            json=payload,
            timeout=self._timeout,
            ssl=self._verify_tls,
        ) as response:
            if response.status == 401:
                logger.info(f"CP API endpoint exists but is unauthorized: {template.method} {url}")
                return None
            if response.status == 404:
                return None
            if not 200 <= response.status < 300:
                await self._log_error_response(response, url)
                raise UpstreamUnavailableError(f"CP API status {response.status}")
            return await response.json(content_type=None)

    async def answers(
        self,
        from_id: str,
        to_id: str,
        day: date,
        start_time: str = "00:00",
        station_id: str | None = None,
    ) -> AsyncIterator[Any]:
        """Try each request template in order and yield every JSON body.

        The caller stops iterating once a body is usable; bodies it rejects
        simply move the scan on to the next template.

        Args:
            from_id: Timetable-API id of the departure station.
            to_id: Timetable-API id of the arrival station.
            day: Service day.
            start_time: "HH:MM" start for station timetable queries.
            station_id: User-facing id of the departure station, used by the
                station timetable endpoint. Defaults to from_id.
        """
        if not self._session:
            return

        for template in self._templates:
            url = self._url_for(template, from_id, to_id, day, start_time, station_id)
            payload = (
                {"from": from_id, "to": to_id, "date": day.isoformat()}
                if template.method == "POST"
                else None
            )
            try:
                data = await self._try_template(template, url, payload)
            except TimeoutError:
                logger.warning(f"CP API request timed out: {template.method} {url}")
                continue
            except UpstreamUnavailableError:
                continue
            except (aiohttp.ClientError, ValueError) as e:
                logger.warning(f"Error calling CP API {template.method} {url}: {e}")
                continue
            if data is not None:
                logger.info(
                    f"CP API answered {template.method} {template.path} "
                    f"with '{template.header_set}' headers"
                )
                yield data

        logger.info(f"No usable CP API answer for {from_id} -> {to_id} on {day}")
