"""Open-Meteo forecast client: 7-day hourly and daily series in imperial units."""

import logging

import httpx

from beachscout.models.forecast import DailySeries, HourlySeries, WeatherSeries

logger = logging.getLogger(__name__)

OPEN_METEO_BASE_URL = "https://api.open-meteo.com/v1"
DEFAULT_USER_AGENT = "beachscout/0.1.0"

HOURLY_VARIABLES = (
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "precipitation_probability",
    "wind_speed_10m",
    "uv_index",
)
DAILY_VARIABLES = (
    "temperature_2m_max",
    "temperature_2m_min",
    "sunrise",
    "sunset",
    "uv_index_max",
    "precipitation_probability_max",
)


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        forecast_days: int = 7,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.forecast_days = forecast_days

    def get_forecast(self, latitude: float, longitude: float) -> dict:
        """Fetch the raw forecast payload. Single attempt; errors propagate."""
        url = f"{self.base_url}/forecast"
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": ",".join(HOURLY_VARIABLES),
            "daily": ",".join(DAILY_VARIABLES),
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "timezone": "auto",
            "forecast_days": self.forecast_days,
        }
        resp = httpx.get(
            url,
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def fetch_weather(self, latitude: float, longitude: float) -> WeatherSeries:
        raw = self.get_forecast(latitude, longitude)
        series = parse_weather(raw)
        logger.debug(
            "Open-Meteo returned %d hours, %d days for (%.4f, %.4f) tz=%s",
            len(series.hourly.time), len(series.daily.time),
            latitude, longitude, series.timezone,
        )
        return series


def parse_weather(raw: dict) -> WeatherSeries:
    """Translate an Open-Meteo response into a WeatherSeries.

    Raises ValueError when a requested variable is missing or its array does
    not line up with the time axis.
    """
    hourly = raw.get("hourly")
    daily = raw.get("daily")
    if not isinstance(hourly, dict) or not isinstance(daily, dict):
        raise ValueError("Open-Meteo response missing hourly/daily blocks")

    hours = _time_axis(hourly, "hourly")
    days = _time_axis(daily, "daily")

    return WeatherSeries(
        hourly=HourlySeries(
            time=hours,
            **{v: _column(hourly, "hourly", v, len(hours)) for v in HOURLY_VARIABLES},
        ),
        daily=DailySeries(
            time=days,
            **{v: _column(daily, "daily", v, len(days)) for v in DAILY_VARIABLES},
        ),
        timezone=raw.get("timezone", "GMT"),
        utc_offset_seconds=int(raw.get("utc_offset_seconds", 0)),
    )


def _time_axis(block: dict, block_name: str) -> list[str]:
    times = block.get("time")
    if not isinstance(times, list):
        raise ValueError(f"Open-Meteo response missing {block_name}.time")
    return times


def _column(block: dict, block_name: str, variable: str, length: int) -> list:
    values = block.get(variable)
    if not isinstance(values, list):
        raise ValueError(f"Open-Meteo response missing {block_name}.{variable}")
    if len(values) != length:
        raise ValueError(
            f"Open-Meteo {block_name}.{variable} has {len(values)} entries, "
            f"expected {length}"
        )
    return values
