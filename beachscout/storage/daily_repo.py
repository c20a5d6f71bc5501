"""Repository for scored daily summaries."""

import sqlite3

from beachscout.models.persistence import WriteResult
from beachscout.models.records import DailySummary

TABLE = "daily_summaries"


def upsert_daily(conn: sqlite3.Connection, rows: list[DailySummary]) -> WriteResult:
    """Insert or overwrite summaries keyed by (location_id, date)."""
    try:
        conn.executemany(
            "INSERT INTO daily_summaries "
            "(location_id, date, sunrise_ts, sunset_ts, temp_air_max, temp_air_min, "
            "temp_water_avg, humidity_avg, uv_max, wind_max, rating_score, crowd_level) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?) "
            "ON CONFLICT(location_id, date) DO UPDATE SET "
            "sunrise_ts = excluded.sunrise_ts, sunset_ts = excluded.sunset_ts, "
            "temp_air_max = excluded.temp_air_max, temp_air_min = excluded.temp_air_min, "
            "temp_water_avg = excluded.temp_water_avg, "
            "humidity_avg = excluded.humidity_avg, uv_max = excluded.uv_max, "
            "wind_max = excluded.wind_max, rating_score = excluded.rating_score, "
            "crowd_level = excluded.crowd_level, updated_at = CURRENT_TIMESTAMP",
            [
                (
                    s.location_id,
                    s.date,
                    s.sunrise_ts,
                    s.sunset_ts,
                    s.temp_air_max,
                    s.temp_air_min,
                    s.temp_water_avg,
                    s.humidity_avg,
                    s.uv_max,
                    s.wind_max,
                    s.rating_score,
                    s.crowd_level.value,
                )
                for s in rows
            ],
        )
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        return WriteResult(table=TABLE, ok=False, error=str(e))
    return WriteResult(table=TABLE, ok=True, rows=len(rows))


def get_daily(conn: sqlite3.Connection, location_id: str) -> list[dict]:
    rows = conn.execute(
        "SELECT * FROM daily_summaries WHERE location_id = ? ORDER BY date",
        (location_id,),
    ).fetchall()
    return [dict(r) for r in rows]
