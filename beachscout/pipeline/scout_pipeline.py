"""Scout pipeline: fetch, fuse, score, and persist every active location."""

import json
import logging
import sqlite3
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, date, datetime, timedelta

from beachscout.config.loader import snapshot_config
from beachscout.config.schema import ScoutConfig
from beachscout.ingest.noaa_tides_client import NoaaTidesClient
from beachscout.ingest.open_meteo_client import OpenMeteoClient
from beachscout.models.common import utc_now
from beachscout.models.forecast import TidePoint, WeatherSeries
from beachscout.models.location import Location
from beachscout.models.persistence import WriteResult
from beachscout.models.records import DailySummary, HourlyRecord
from beachscout.models.reporting import LocationOutcome, LocationStatus, RunSummary
from beachscout.reporting.formatters import format_summary_text
from beachscout.reporting.run_summarizer import RunSummarizer
from beachscout.scoring.fusion import fuse_hourly
from beachscout.scoring.rollup import rollup_daily
from beachscout.storage import daily_repo, hourly_repo, location_repo, run_repo
from beachscout.storage.database import open_store

logger = logging.getLogger(__name__)

DEFAULT_DB = "data/beachscout.db"
FETCH_WORKERS = 3


class ScoutPipeline:
    def __init__(
        self,
        config: ScoutConfig,
        db_path: str = DEFAULT_DB,
        weather_client: OpenMeteoClient | None = None,
        tides_client: NoaaTidesClient | None = None,
    ):
        self.config = config
        self.db_path = db_path
        providers = config.providers
        self.weather = weather_client or OpenMeteoClient(
            base_url=providers.weather_base_url,
            user_agent=providers.user_agent,
            timeout=providers.timeout_seconds,
            forecast_days=providers.forecast_days,
        )
        self.tides = tides_client or NoaaTidesClient(
            base_url=providers.tides_base_url,
            user_agent=providers.user_agent,
            application=providers.application,
            timeout=providers.timeout_seconds,
            # one extra day: the window starts a day early, see tide_window_start
            prediction_days=providers.forecast_days + 1,
        )

    def run(self, now: datetime | None = None) -> RunSummary:
        """Execute one pass over all active locations.

        Locations are processed one after another; a location's failure is
        recorded in its outcome and never stops the loop. Only an unreadable
        location source fails the run as a whole.
        """
        start_time = time.monotonic()
        run_started = now or utc_now()
        run_id = str(uuid.uuid4())

        # 1. INIT
        conn = open_store(self.db_path)
        c_hash = snapshot_config(self.config, conn)
        run_repo.create_run(conn, run_id, c_hash)
        summarizer = RunSummarizer(run_id, c_hash)
        logger.info("Run %s starting (config %s)", run_id[:8], c_hash)

        try:
            # 2. LOCATIONS
            try:
                locations = location_repo.get_active_locations(conn)
            except sqlite3.Error as e:
                logger.exception("Fatal: could not load active locations")
                summarizer.record_error(f"Location source unavailable: {e}")
                summarizer.record_duration(time.monotonic() - start_time)
                run_repo.complete_run(conn, run_id, "failed", error_message=str(e))
                return summarizer.finalize()

            summarizer.record_locations(len(locations))
            logger.info("Found %d active locations", len(locations))

            # 3. SCOUT each location in turn
            for location in locations:
                outcome = self.process_location(conn, location, run_started)
                summarizer.record_outcome(outcome)

            # 4. REPORT
            summarizer.record_duration(time.monotonic() - start_time)
            summary = summarizer.finalize()
            run_repo.complete_run(
                conn,
                run_id,
                "completed",
                summary_json=json.dumps({
                    o.location_id: o.status.value for o in summary.outcomes
                }),
                locations_scanned=summary.locations_scanned,
                locations_succeeded=summary.locations_succeeded,
                locations_partial=summary.locations_partial,
                locations_failed=summary.locations_failed,
                hourly_rows_written=summary.hourly_rows_written,
                daily_rows_written=summary.daily_rows_written,
            )
            logger.info("\n%s", format_summary_text(summary))
            return summary

        except Exception as e:
            logger.exception("Scout run failed")
            summarizer.record_error(str(e))
            summarizer.record_duration(time.monotonic() - start_time)
            run_repo.complete_run(conn, run_id, "failed", error_message=str(e))
            return summarizer.finalize()

        finally:
            conn.close()
            logger.info("Run %s finished, going back to sleep", run_id[:8])

    def process_location(
        self, conn: sqlite3.Connection, location: Location, run_started: datetime
    ) -> LocationOutcome:
        """FETCH -> FUSE -> ROLLUP -> PERSIST for one location. Never raises."""
        loc_id = location.location_id
        logger.info("Scouting %s (%s)", location.display_name, loc_id)

        try:
            weather, tides, water_temp = self._fetch_all(location, run_started)
            hourly = fuse_hourly(
                loc_id, weather, tides, self.config.fusion.tide_collision
            )
            resolved_water = (
                water_temp
                if water_temp is not None
                else self.config.providers.default_water_temp_f
            )
            daily = rollup_daily(
                loc_id, weather, resolved_water, hourly, self.config.scoring
            )
        except Exception as e:
            logger.exception("Critical failure for %s", loc_id)
            return LocationOutcome(
                location_id=loc_id,
                status=LocationStatus.FAILED,
                error=f"{type(e).__name__}: {e}",
            )

        warnings: list[str] = []
        if not tides:
            warnings.append("no tide predictions, tide heights default to 0")
        if water_temp is None:
            warnings.append(
                f"water temperature unavailable, using "
                f"{self.config.providers.default_water_temp_f:g}F"
            )

        deleted, inserted, upserted = self._persist(
            conn, loc_id, weather, hourly, daily, run_started
        )
        for result in (deleted, inserted, upserted):
            if not result.ok:
                warnings.append(f"{result.table} write failed: {result.error}")

        return LocationOutcome(
            location_id=loc_id,
            status=LocationStatus.PARTIAL if warnings else LocationStatus.SUCCESS,
            hourly_rows=inserted.rows if inserted.ok else 0,
            daily_rows=upserted.rows if upserted.ok else 0,
            warnings=warnings,
        )

    def _fetch_all(
        self, location: Location, run_started: datetime
    ) -> tuple[WeatherSeries, list[TidePoint], float | None]:
        """Run the three provider fetches concurrently and join them.

        Tide and water fetches degrade instead of raising; a weather error is
        re-raised here once the other two have finished.
        """
        begin = tide_window_start(run_started)
        with ThreadPoolExecutor(
            max_workers=FETCH_WORKERS, thread_name_prefix=f"fetch-{location.location_id}"
        ) as pool:
            weather_f = pool.submit(
                self.weather.fetch_weather, location.latitude, location.longitude
            )
            tides_f = pool.submit(
                self.tides.fetch_tides, location.noaa_station_id, begin
            )
            water_f = pool.submit(
                self.tides.fetch_water_temp, location.noaa_station_id
            )
            return weather_f.result(), tides_f.result(), water_f.result()

    def _persist(
        self,
        conn: sqlite3.Connection,
        location_id: str,
        weather: WeatherSeries,
        hourly: list[HourlyRecord],
        daily: list[DailySummary],
        run_started: datetime,
    ) -> tuple[WriteResult, WriteResult, WriteResult]:
        """Replace the hourly window, then upsert daily summaries, in that order."""
        cutoff = hourly_cutoff(run_started, weather, hourly)
        logger.info("%s: replacing hourly rows from %s", location_id, cutoff)
        deleted = hourly_repo.delete_hourly_since(conn, location_id, cutoff)
        _log_write(location_id, "hourly cleared", deleted)

        inserted = hourly_repo.insert_hourly(conn, hourly)
        _log_write(location_id, "hourly saved", inserted)

        upserted = daily_repo.upsert_daily(conn, daily)
        _log_write(location_id, "daily summaries saved", upserted)

        return deleted, inserted, upserted


def tide_window_start(run_started: datetime) -> date:
    """First day of tide predictions to request.

    CO-OPS dates are station-local and the station's zone is unknown before
    the weather arrives, so the window opens the day before the UTC date.
    That covers local "today" anywhere from UTC-12 to UTC+14.
    """
    return run_started.astimezone(UTC).date() - timedelta(days=1)


def hourly_cutoff(
    run_started: datetime, weather: WeatherSeries, hourly: list[HourlyRecord]
) -> str:
    """First local timestamp whose stored hourly rows get replaced.

    The run start is shifted into the location's wall clock with the
    forecast's UTC offset. The forecast timeline starts at local midnight,
    so when its first hour precedes the run start the cutoff moves back to
    that hour and re-inserted rows never duplicate.
    """
    local = run_started.astimezone(UTC).replace(tzinfo=None) + timedelta(
        seconds=weather.utc_offset_seconds
    )
    cutoff = local.strftime("%Y-%m-%dT%H:%M")
    if hourly and hourly[0].timestamp < cutoff:
        return hourly[0].timestamp
    return cutoff


def _log_write(location_id: str, action: str, result: WriteResult) -> None:
    if result.ok:
        logger.info("%s: %s (%d rows)", location_id, action, result.rows)
    else:
        logger.error("%s: %s write failed: %s", location_id, result.table, result.error)
