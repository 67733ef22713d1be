"""Reconciliation settings domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReconciliationSettings:
    """Tunable thresholds for the reconciliation engine."""

    departure_grace_minutes: int = 0  # Rows this many minutes past departure are still shown
    freeze_threshold_minutes: int = 3  # Undelayed countdown at which the hide instant is frozen
    per_station_transit_minutes: int = 2  # Scheduled running time between adjacent stations
    match_window_minutes: int = 30  # Max distance between a live train and its slot
    direct_page_size: int = 10
    overview_page_size: int = 4
    mock_slot_count: int = 6
    disappearance_retention_minutes: int = 180  # Frozen instants older than this are evicted
