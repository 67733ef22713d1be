"""Itinerary repository backed by the CP timetable API."""

import logging
from contextlib import aclosing
from datetime import date
from typing import TYPE_CHECKING

from cascais_departures.adapters.cp_api.constants import CP_API_BASE_URL
from cascais_departures.adapters.cp_api.http_client import CpHttpClient
from cascais_departures.adapters.cp_api.itinerary_parser import ItineraryParser
from cascais_departures.domain.errors import MalformedUpstreamShapeError
from cascais_departures.domain.models.itinerary_record import ItineraryRecord
from cascais_departures.domain.ports.itinerary_repository import ItineraryRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class CpItineraryRepository(ItineraryRepository):
    """Adapter for the CP timetable API."""

    def __init__(
        self,
        session: "ClientSession | None" = None,
        base_url: str = CP_API_BASE_URL,
        api_key: str | None = None,
        connect_id: str | None = None,
        connect_secret: str | None = None,
        timeout_seconds: float = 5.0,
        verify_tls: bool = False,
    ) -> None:
        self._http_client = CpHttpClient(
            session=session,
            base_url=base_url,
            api_key=api_key,
            connect_id=connect_id,
            connect_secret=connect_secret,
            timeout_seconds=timeout_seconds,
            verify_tls=verify_tls,
        )

    async def fetch_itinerary(
        self,
        from_id: str,
        to_id: str,
        day: date,
        start_time: str = "00:00",
        station_id: str | None = None,
    ) -> list[ItineraryRecord] | None:
        """Get normalized records between two stations.

        Answers with an unknown shape or without usable records do not end
        the scan; the next request template is tried.

        Returns:
            Parsed records from the first usable answer, or None if there was none.
        """
        answers = self._http_client.answers(from_id, to_id, day, start_time, station_id)
        async with aclosing(answers):
            async for data in answers:
                try:
                    raw_records = ItineraryParser.extract_records(data)
                except MalformedUpstreamShapeError as e:
                    logger.warning(f"Discarding CP API response: {e}")
                    continue

                records = ItineraryParser.parse_records(raw_records)
                if records:
                    return records
                logger.info(f"CP API answer held no usable records for {from_id} -> {to_id}")
        return None
