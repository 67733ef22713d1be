"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A station on the line, with its identifier in each upstream namespace."""

    user_id: str  # Identifier used by clients (e.g., "94-69187")
    live_id: str  # Identifier used by the live vehicle feed
    timetable_id: str  # Identifier used by the official timetable API
    name: str
    offset_minutes: int  # Cumulative scheduled travel time from the origin terminus

    def codes(self) -> set[str]:
        """All identifiers this station is known by."""
        return {self.user_id, self.live_id, self.timetable_id}
