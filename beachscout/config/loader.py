"""YAML config loader with snapshot persistence and dotted-key lookup."""

import hashlib
from pathlib import Path
from typing import Any

import yaml

from beachscout.config.defaults import DEFAULT_LOCATIONS
from beachscout.config.schema import ScoutConfig


def load_config(path: str | Path) -> ScoutConfig:
    """Load and validate config from a YAML file.

    If no locations are specified in the YAML, injects DEFAULT_LOCATIONS.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if "locations" not in raw or not raw["locations"]:
        raw["locations"] = [loc.model_dump() for loc in DEFAULT_LOCATIONS]

    return ScoutConfig(**raw)


def config_hash(config: ScoutConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def snapshot_config(config: ScoutConfig, db: Any) -> str:
    """Persist a config snapshot to the database if it changed. Returns the hash."""
    h = config_hash(config)
    cursor = db.execute(
        "SELECT 1 FROM config_snapshots WHERE config_hash = ?", (h,)
    )
    if cursor.fetchone() is None:
        db.execute(
            "INSERT INTO config_snapshots (config_hash, config_json, created_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP)",
            (h, config.model_dump_json()),
        )
        db.commit()
    return h


def get_config_value(config: ScoutConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'scoring.max_wind_mph'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
