"""NOAA CO-OPS client for tide predictions and water temperature.

Both products are optional inputs: failures are logged as warnings and
degrade to an empty tide series or a missing water temperature.
"""

import logging
from datetime import date, datetime, timedelta

import httpx

from beachscout.models.common import round_half_up
from beachscout.models.forecast import TidePoint

logger = logging.getLogger(__name__)

NOAA_TIDES_BASE_URL = "https://api.tidesandcurrents.noaa.gov/api/prod"
DEFAULT_USER_AGENT = "beachscout/0.1.0"
DEFAULT_APPLICATION = "beachscout"


class NoaaApiError(Exception):
    """CO-OPS answered 200 with an error payload (unknown station, no data)."""


class NoaaTidesClient:
    def __init__(
        self,
        base_url: str = NOAA_TIDES_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        application: str = DEFAULT_APPLICATION,
        timeout: float = 30.0,
        prediction_days: int = 7,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.application = application
        self.timeout = timeout
        self.prediction_days = prediction_days

    def get_data(self, params: dict) -> dict:
        """GET the datagetter endpoint. Raises on transport, HTTP, or API errors."""
        url = f"{self.base_url}/datagetter"
        query = {
            **params,
            "time_zone": "lst_ldt",
            "units": "english",
            "application": self.application,
            "format": "json",
        }
        resp = httpx.get(
            url,
            params=query,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise NoaaApiError(f"unexpected payload type {type(data).__name__}")
        if "error" in data:
            message = (data["error"] or {}).get("message", "unknown error")
            raise NoaaApiError(message)
        return data

    def fetch_tides(
        self, station_id: str, today: date | None = None
    ) -> list[TidePoint]:
        """Hourly predictions for [today, today + prediction_days]. Empty on failure."""
        begin = today or date.today()
        end = begin + timedelta(days=self.prediction_days)
        params = {
            "begin_date": begin.strftime("%Y%m%d"),
            "end_date": end.strftime("%Y%m%d"),
            "station": station_id,
            "product": "predictions",
            "datum": "MLLW",
            "interval": "h",
        }
        try:
            data = self.get_data(params)
        except Exception as e:
            logger.warning("Tide fetch failed for station %s: %s", station_id, e)
            return []

        return _parse_predictions(data.get("predictions") or [], station_id)

    def fetch_water_temp(self, station_id: str) -> float | None:
        """Latest water temperature in degrees F, or None when unavailable."""
        params = {
            "date": "latest",
            "station": station_id,
            "product": "water_temperature",
        }
        try:
            data = self.get_data(params)
            readings = data.get("data") or []
            if not readings:
                logger.warning("No water temperature reading for station %s", station_id)
                return None
            return float(round_half_up(float(readings[0]["v"])))
        except Exception as e:
            logger.warning(
                "Water temp fetch failed for station %s (sensor likely offline): %s",
                station_id, e,
            )
            return None


def _parse_predictions(predictions: list[dict], station_id: str) -> list[TidePoint]:
    points: list[TidePoint] = []
    skipped = 0
    for p in predictions:
        try:
            # CO-OPS local times look like "2026-10-18 13:00"
            points.append(
                TidePoint(
                    timestamp=datetime.fromisoformat(p["t"]),
                    height=float(p["v"]),
                )
            )
        except (KeyError, TypeError, ValueError):
            skipped += 1
    if skipped:
        logger.warning(
            "Skipped %d malformed tide predictions for station %s", skipped, station_id
        )
    return points
