"""Departure result domain models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DepartureResult(BaseModel):
    """A single upcoming departure as returned to clients.

    A missing train number marks a schedule-only projection that no live or
    timetable source has confirmed.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    train_number: str | None = None
    scheduled_time: str
    minutes_to_departure: int = Field(ge=0)
    delay_minutes: int = 0
    destination_name: str
    is_delayed: bool = False
    platform: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return self.model_dump(by_alias=True)


class StationOverview(BaseModel):
    """Departures in both directions from one station."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    station_id: str
    station_name: str
    to_origin: list[DepartureResult]
    to_terminus: list[DepartureResult]

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return self.model_dump(by_alias=True)
