"""Run outcome and operational health models."""

from dataclasses import dataclass, field
from enum import StrEnum


class LocationStatus(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"  # degraded inputs or a failed write
    FAILED = "failed"


@dataclass
class LocationOutcome:
    location_id: str
    status: LocationStatus
    hourly_rows: int = 0
    daily_rows: int = 0
    warnings: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass
class RunSummary:
    run_id: str
    config_hash: str = ""
    locations_scanned: int = 0
    locations_succeeded: int = 0
    locations_partial: int = 0
    locations_failed: int = 0
    hourly_rows_written: int = 0
    daily_rows_written: int = 0
    duration_seconds: float = 0.0
    outcomes: list[LocationOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HealthStatus:
    db_connected: bool
    weather_api_reachable: bool
    tides_api_reachable: bool
    last_run_age_minutes: float | None
    last_run_status: str | None
    active_locations: int
