"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class TideCollisionPolicy(StrEnum):
    """Which height wins when several tide points truncate to the same hour."""

    LAST = "last"
    FIRST = "first"
    MEAN = "mean"


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    location_id: str
    display_name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    noaa_station_id: str
    is_active: bool = True


class ScoringConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    max_wind_mph: float = Field(default=15.0, ge=0.0)
    max_temp_f: float = 85.0
    min_temp_f: float = 55.0
    max_precip_pct: float = Field(default=10.0, ge=0.0, le=100.0)
    wind_penalty: int = Field(default=20, ge=0, le=100)
    heat_penalty: int = Field(default=20, ge=0, le=100)
    cold_penalty: int = Field(default=10, ge=0, le=100)
    rain_penalty: int = Field(default=40, ge=0, le=100)
    moderate_min_score: int = Field(default=80, ge=0, le=100)


class FusionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    tide_collision: TideCollisionPolicy = TideCollisionPolicy.LAST


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather_base_url: str = "https://api.open-meteo.com/v1"
    tides_base_url: str = "https://api.tidesandcurrents.noaa.gov/api/prod"
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    forecast_days: int = Field(default=7, ge=1, le=16)
    default_water_temp_f: float = 60.0
    user_agent: str = "beachscout/0.1.0"
    application: str = "beachscout"


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    run_interval_minutes: int = Field(default=60, ge=1)


class ScoutConfig(BaseModel):
    model_config = {"extra": "forbid"}

    scoring: ScoringConfig = ScoringConfig()
    fusion: FusionConfig = FusionConfig()
    providers: ProviderConfig = ProviderConfig()
    ops: OpsConfig = OpsConfig()
    locations: list[LocationConfig] = []
