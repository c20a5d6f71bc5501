"""Health checker: store connectivity, provider reachability, last run age."""

import sqlite3
from datetime import UTC, datetime

import httpx

from beachscout.config.schema import ProviderConfig
from beachscout.models.reporting import HealthStatus
from beachscout.storage import location_repo, run_repo


class HealthChecker:
    def __init__(self, conn: sqlite3.Connection, providers: ProviderConfig):
        self.conn = conn
        self.providers = providers

    def check(self) -> HealthStatus:
        run = run_repo.get_latest_run(self.conn)
        return HealthStatus(
            db_connected=self._check_db(),
            weather_api_reachable=self._check_url(
                f"{self.providers.weather_base_url}/forecast",
                {"latitude": 0, "longitude": 0, "forecast_days": 1},
            ),
            tides_api_reachable=self._check_url(
                f"{self.providers.tides_base_url}/datagetter",
                {"date": "latest", "station": "9410170", "product": "water_level",
                 "datum": "MLLW", "units": "english", "time_zone": "gmt",
                 "application": self.providers.application, "format": "json"},
            ),
            last_run_age_minutes=_run_age_minutes(run),
            last_run_status=run["status"] if run else None,
            active_locations=len(location_repo.get_active_locations(self.conn)),
        )

    def _check_db(self) -> bool:
        try:
            self.conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    def _check_url(self, url: str, params: dict) -> bool:
        try:
            resp = httpx.get(
                url,
                params=params,
                headers={"User-Agent": self.providers.user_agent},
                timeout=10.0,
            )
            return resp.status_code == 200
        except httpx.HTTPError:
            return False


def _run_age_minutes(run: dict | None) -> float | None:
    if run is None or run.get("completed_at") is None:
        return None
    try:
        # SQLite CURRENT_TIMESTAMP is UTC without an offset
        end = datetime.fromisoformat(run["completed_at"])
    except (ValueError, TypeError):
        return None
    if end.tzinfo is None:
        end = end.replace(tzinfo=UTC)
    return (datetime.now(UTC) - end).total_seconds() / 60
