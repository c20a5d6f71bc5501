"""Initial schema: locations, hourly details, daily summaries, run bookkeeping."""

import sqlite3

DDL = [
    # Monitored locations, managed outside the pipeline
    """
    CREATE TABLE IF NOT EXISTS locations (
        location_id TEXT PRIMARY KEY,
        display_name TEXT NOT NULL,
        latitude REAL NOT NULL,
        longitude REAL NOT NULL,
        noaa_station_id TEXT NOT NULL,
        is_active INTEGER NOT NULL DEFAULT 1,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,

    # Fused hourly forecast; replaced per run from the cutoff forward
    """
    CREATE TABLE IF NOT EXISTS hourly_details (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        location_id TEXT NOT NULL REFERENCES locations(location_id),
        timestamp TEXT NOT NULL,
        temp_air INTEGER,
        temp_feels_like INTEGER,
        humidity REAL,
        wind_speed INTEGER,
        precip_chance REAL,
        uv_index REAL,
        tide_height REAL NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_hourly_location_ts "
        "ON hourly_details(location_id, timestamp)"
    ),

    # Scored daily summaries; upserted on (location_id, date)
    """
    CREATE TABLE IF NOT EXISTS daily_summaries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        location_id TEXT NOT NULL REFERENCES locations(location_id),
        date TEXT NOT NULL,
        sunrise_ts TEXT,
        sunset_ts TEXT,
        temp_air_max INTEGER,
        temp_air_min INTEGER,
        temp_water_avg REAL NOT NULL,
        humidity_avg INTEGER,
        uv_max REAL,
        wind_max INTEGER,
        rating_score INTEGER NOT NULL,
        crowd_level TEXT NOT NULL,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(location_id, date)
    )
    """,

    # Config snapshots
    """
    CREATE TABLE IF NOT EXISTS config_snapshots (
        config_hash TEXT PRIMARY KEY,
        config_json TEXT NOT NULL,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,

    # Pipeline run log
    """
    CREATE TABLE IF NOT EXISTS runs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        run_id TEXT UNIQUE NOT NULL,
        config_hash TEXT,
        started_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
        completed_at TEXT,
        status TEXT NOT NULL DEFAULT 'running',
        locations_scanned INTEGER NOT NULL DEFAULT 0,
        locations_succeeded INTEGER NOT NULL DEFAULT 0,
        locations_partial INTEGER NOT NULL DEFAULT 0,
        locations_failed INTEGER NOT NULL DEFAULT 0,
        hourly_rows_written INTEGER NOT NULL DEFAULT 0,
        daily_rows_written INTEGER NOT NULL DEFAULT 0,
        summary_json TEXT,
        error_message TEXT
    )
    """,
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
