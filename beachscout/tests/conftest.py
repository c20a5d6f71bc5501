"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from beachscout.config.defaults import DEFAULT_LOCATIONS
from beachscout.config.schema import ScoutConfig
from beachscout.ingest.open_meteo_client import parse_weather
from beachscout.models.forecast import WeatherSeries
from beachscout.models.location import Location
from beachscout.storage import location_repo
from beachscout.storage.database import connect, run_migrations

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """Create a temporary SQLite database with config_snapshots table."""
    db_path = tmp_path / "test.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute(
        "CREATE TABLE config_snapshots ("
        "  config_hash TEXT PRIMARY KEY,"
        "  config_json TEXT NOT NULL,"
        "  created_at TEXT NOT NULL"
        ")"
    )
    conn.commit()
    return conn


@pytest.fixture
def location() -> Location:
    return Location(
        location_id="ocean-beach-dog-beach",
        display_name="Ocean Beach Dog Beach",
        latitude=32.7503,
        longitude=-117.2528,
        noaa_station_id="9410170",
    )


@pytest.fixture
def db(tmp_path: Path, location: Location) -> sqlite3.Connection:
    """Fully migrated store seeded with one location."""
    conn = connect(tmp_path / "store.db")
    run_migrations(conn)
    location_repo.upsert_locations(conn, [location])
    yield conn
    conn.close()


@pytest.fixture
def default_config() -> ScoutConfig:
    """Return default ScoutConfig with default locations."""
    return ScoutConfig(locations=DEFAULT_LOCATIONS)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "scoring": {"max_wind_mph": 12},
        "fusion": {"tide_collision": "first"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def open_meteo_raw() -> dict:
    with open(FIXTURE_DIR / "open_meteo_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def weather(open_meteo_raw: dict) -> WeatherSeries:
    """48 hours (Fri 2026-10-16, Sat 2026-10-17) and 3 forecast days."""
    return parse_weather(open_meteo_raw)
