"""HTTP handlers for the departures API."""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse

from cascais_departures.domain.errors import InvalidStationError
from cascais_departures.domain.models.departure_result import DepartureResult
from cascais_departures.domain.ports.departure_board import DepartureBoard
from cascais_departures.domain.ports.station_registry import StationRegistry

logger = logging.getLogger(__name__)

# Train data must be fresh on every call
NO_STORE = "no-store, no-cache, must-revalidate, private"
# The station list only changes with a deployment
CACHE_FOR_A_DAY = "s-maxage=86400, stale-while-revalidate"


class DepartureHandlers:
    """Request handlers bound to a departure board and the station registry."""

    def __init__(
        self,
        board: DepartureBoard,
        registry: StationRegistry,
        overview_page_size: int = 4,
    ) -> None:
        self._board = board
        self._registry = registry
        self._overview_page_size = overview_page_size

    @staticmethod
    def _json(content: object, status_code: int = 200) -> JSONResponse:
        return JSONResponse(content, status_code=status_code, headers={"Cache-Control": NO_STORE})

    @staticmethod
    def _rows(rows: list[DepartureResult]) -> list[dict[str, object]]:
        return [row.to_payload() for row in rows]

    async def trains(self, request: Request) -> JSONResponse:
        """GET /trains?stationId=<id>&toStationId=<id>"""
        station_id = request.query_params.get("stationId")
        destination_id = request.query_params.get("toStationId") or None
        try:
            rows = await self._board.get_departures(station_id, destination_id)
        except InvalidStationError as e:
            return self._json({"error": str(e)}, status_code=400)
        except Exception:
            logger.exception(f"Departure query failed for {station_id!r}, serving mock departures")
            try:
                rows = self._board.fallback_departures(station_id, destination_id)
            except Exception:
                logger.exception("Mock departures failed")
                return self._json({"error": "Internal server error"}, status_code=500)
        return self._json(self._rows(rows))

    async def overview(self, request: Request) -> JSONResponse:
        """GET /trains/overview?stationId=<id>"""
        station_id = request.query_params.get("stationId")
        try:
            overview = await self._board.get_overview(station_id)
        except InvalidStationError as e:
            return self._json({"error": str(e)}, status_code=400)
        except Exception:
            logger.exception(f"Overview query failed for {station_id!r}, serving mock departures")
            try:
                return self._json(self._fallback_overview(station_id))
            except Exception:
                logger.exception("Mock overview failed")
                return self._json({"error": "Internal server error"}, status_code=500)
        return self._json(overview.to_payload())

    def _fallback_overview(self, station_id: str | None) -> dict[str, object]:
        station = self._registry.resolve(station_id)
        rows = self._board.fallback_departures(station_id)
        size = self._overview_page_size
        origin_name = self._registry.origin.name
        return {
            "stationId": station.user_id,
            "stationName": station.name,
            "toOrigin": self._rows([r for r in rows if r.destination_name == origin_name][:size]),
            "toTerminus": self._rows([r for r in rows if r.destination_name != origin_name][:size]),
        }

    async def stations(self, _request: Request) -> JSONResponse:
        """GET /stations"""
        payload = [{"id": s.user_id, "name": s.name} for s in self._registry.stations()]
        return JSONResponse(payload, headers={"Cache-Control": CACHE_FOR_A_DAY})

    async def health(self, _request: Request) -> JSONResponse:
        """GET /health"""
        return JSONResponse({"status": "ok"})
