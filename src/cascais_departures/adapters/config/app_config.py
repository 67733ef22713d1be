"""12-factor configuration adapter using environment variables."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cascais_departures.domain.models.reconciliation_settings import ReconciliationSettings


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")

    timezone: str = Field(
        default="Europe/Lisbon",
        description="Reference timezone for timetables and countdowns (IANA timezone name)",
    )

    # Line data (stations and static timetables)
    line_data_file: str | None = Field(
        default=None,
        description="Path to a TOML file overriding the packaged line data",
    )

    # Live vehicle feed configuration
    live_feed_url: str = Field(
        default="https://api-gateway.cp.pt/cp/services/vehicles-api/vehicles",
        description="Endpoint returning current vehicle positions",
    )
    live_feed_timeout_seconds: float = Field(
        default=5.0, description="Timeout for live feed requests in seconds"
    )
    live_service_code: str | None = Field(
        default=None,
        description="Service code of the line in the live feed (defaults to the line data value)",
    )

    # Official timetable API configuration
    cp_api_base_url: str = Field(
        default="https://api-gateway.cp.pt",
        description="Base URL of the official timetable API gateway",
    )
    cp_api_key: str | None = Field(default=None, description="x-api-key header value")
    cp_connect_id: str | None = Field(default=None, description="x-cp-connect-id header value")
    cp_connect_secret: str | None = Field(
        default=None, description="x-cp-connect-secret header value"
    )
    cp_api_timeout_seconds: float = Field(
        default=5.0, description="Timeout for each timetable API request in seconds"
    )

    upstream_verify_tls: bool = Field(
        default=False,
        description="Verify TLS certificates of upstream APIs",
    )

    # Reconciliation configuration
    departure_grace_minutes: int = Field(
        default=0,
        description="Minutes after departure during which a train is still listed",
    )
    freeze_threshold_minutes: int = Field(
        default=3,
        description="Undelayed countdown at which a matched train's hide time is frozen",
    )
    per_station_transit_minutes: int = Field(
        default=2, description="Scheduled running time between adjacent stations"
    )
    match_window_minutes: int = Field(
        default=30, description="Maximum distance between a live train and its schedule slot"
    )
    direct_page_size: int = Field(
        default=10, description="Number of departures returned for a station query"
    )
    overview_page_size: int = Field(
        default=4, description="Number of departures per direction in the overview"
    )
    weekday_overlay_enabled: bool = Field(
        default=True, description="Add the weekday peak timetable on Monday to Friday"
    )
    mock_slot_count: int = Field(
        default=6, description="Number of synthetic departures when no source has data"
    )
    disappearance_retention_minutes: int = Field(
        default=180,
        description="Minutes a frozen disappearance instant is kept before eviction",
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name: {v}") from e
        return v

    @field_validator(
        "direct_page_size", "overview_page_size", "per_station_transit_minutes", "mock_slot_count"
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts and durations are positive."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Reference timezone as a tzinfo object."""
        return ZoneInfo(self.timezone)

    def reconciliation_settings(self) -> ReconciliationSettings:
        """Build the engine settings from this configuration."""
        return ReconciliationSettings(
            departure_grace_minutes=self.departure_grace_minutes,
            freeze_threshold_minutes=self.freeze_threshold_minutes,
            per_station_transit_minutes=self.per_station_transit_minutes,
            match_window_minutes=self.match_window_minutes,
            direct_page_size=self.direct_page_size,
            overview_page_size=self.overview_page_size,
            mock_slot_count=self.mock_slot_count,
            disappearance_retention_minutes=self.disappearance_retention_minutes,
        )
