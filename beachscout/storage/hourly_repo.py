"""Repository for fused hourly details.

Writes report failures as a WriteResult instead of raising, so a failed
table write never aborts the rest of a location's persistence.
"""

import sqlite3

from beachscout.models.persistence import WriteResult
from beachscout.models.records import HourlyRecord

TABLE = "hourly_details"


def delete_hourly_since(
    conn: sqlite3.Connection, location_id: str, cutoff: str
) -> WriteResult:
    """Delete a location's hourly rows with timestamp >= cutoff."""
    try:
        cursor = conn.execute(
            "DELETE FROM hourly_details WHERE location_id = ? AND timestamp >= ?",
            (location_id, cutoff),
        )
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        return WriteResult(table=TABLE, ok=False, error=str(e))
    return WriteResult(table=TABLE, ok=True, rows=cursor.rowcount)


def insert_hourly(conn: sqlite3.Connection, rows: list[HourlyRecord]) -> WriteResult:
    """Insert hourly rows in one transaction (all or nothing)."""
    try:
        conn.executemany(
            "INSERT INTO hourly_details "
            "(location_id, timestamp, temp_air, temp_feels_like, humidity, "
            "wind_speed, precip_chance, uv_index, tide_height) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (
                    r.location_id,
                    r.timestamp,
                    r.temp_air,
                    r.temp_feels_like,
                    r.humidity,
                    r.wind_speed,
                    r.precip_chance,
                    r.uv_index,
                    r.tide_height,
                )
                for r in rows
            ],
        )
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        return WriteResult(table=TABLE, ok=False, error=str(e))
    return WriteResult(table=TABLE, ok=True, rows=len(rows))


def get_hourly(conn: sqlite3.Connection, location_id: str) -> list[dict]:
    """All stored hourly rows for a location, oldest first."""
    rows = conn.execute(
        "SELECT * FROM hourly_details WHERE location_id = ? ORDER BY timestamp, id",
        (location_id,),
    ).fetchall()
    return [dict(r) for r in rows]
