"""Forecast and tide data models, already translated from provider schemas."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HourlySeries:
    time: list[str]  # local wall clock, e.g. "2026-10-18T13:00"
    temperature_2m: list[float | None]
    apparent_temperature: list[float | None]
    relative_humidity_2m: list[float | None]
    wind_speed_10m: list[float | None]
    precipitation_probability: list[float | None]
    uv_index: list[float | None]


@dataclass(frozen=True)
class DailySeries:
    time: list[str]  # YYYY-MM-DD
    temperature_2m_max: list[float | None]
    temperature_2m_min: list[float | None]
    precipitation_probability_max: list[float | None]
    uv_index_max: list[float | None]
    sunrise: list[str | None]
    sunset: list[str | None]


@dataclass(frozen=True)
class WeatherSeries:
    hourly: HourlySeries
    daily: DailySeries
    timezone: str = "GMT"
    utc_offset_seconds: int = 0


@dataclass(frozen=True)
class TidePoint:
    timestamp: datetime  # station local time, naive
    height: float  # feet above MLLW
