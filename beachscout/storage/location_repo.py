"""Repository for monitored locations."""

import sqlite3

from beachscout.models.location import Location


def upsert_locations(conn: sqlite3.Connection, locations: list[Location]) -> int:
    """Insert or update locations by location_id. Returns the number written."""
    conn.executemany(
        "INSERT INTO locations "
        "(location_id, display_name, latitude, longitude, noaa_station_id, is_active) "
        "VALUES (?, ?, ?, ?, ?, ?) "
        "ON CONFLICT(location_id) DO UPDATE SET "
        "display_name = excluded.display_name, latitude = excluded.latitude, "
        "longitude = excluded.longitude, noaa_station_id = excluded.noaa_station_id, "
        "is_active = excluded.is_active, updated_at = CURRENT_TIMESTAMP",
        [
            (
                loc.location_id,
                loc.display_name,
                loc.latitude,
                loc.longitude,
                loc.noaa_station_id,
                int(loc.is_active),
            )
            for loc in locations
        ],
    )
    conn.commit()
    return len(locations)


def get_active_locations(conn: sqlite3.Connection) -> list[Location]:
    """All locations with is_active set, ordered by id. Errors propagate."""
    rows = conn.execute(
        "SELECT * FROM locations WHERE is_active = 1 ORDER BY location_id"
    ).fetchall()
    return [_to_location(r) for r in rows]


def list_locations(conn: sqlite3.Connection) -> list[Location]:
    rows = conn.execute("SELECT * FROM locations ORDER BY location_id").fetchall()
    return [_to_location(r) for r in rows]


def _to_location(row: sqlite3.Row) -> Location:
    return Location(
        location_id=row["location_id"],
        display_name=row["display_name"],
        latitude=row["latitude"],
        longitude=row["longitude"],
        noaa_station_id=row["noaa_station_id"],
        is_active=bool(row["is_active"]),
    )
