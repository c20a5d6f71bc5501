"""Hourly and daily records written to the store."""

from dataclasses import dataclass
from enum import StrEnum


class CrowdLevel(StrEnum):
    QUIET = "Quiet"
    MODERATE = "Moderate"
    PARTY = "Party"


@dataclass(frozen=True)
class HourlyRecord:
    location_id: str
    timestamp: str
    temp_air: int | None
    temp_feels_like: int | None
    humidity: float | None
    wind_speed: int | None
    precip_chance: float | None
    uv_index: float | None
    tide_height: float


@dataclass(frozen=True)
class DailySummary:
    location_id: str
    date: str  # YYYY-MM-DD
    sunrise_ts: str | None
    sunset_ts: str | None
    temp_air_max: int | None
    temp_air_min: int | None
    temp_water_avg: float
    humidity_avg: int | None
    uv_max: float | None
    wind_max: int | None
    rating_score: int
    crowd_level: CrowdLevel
