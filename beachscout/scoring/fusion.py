"""Hourly fusion: aligns tide predictions onto the weather's hourly timeline."""

from collections import defaultdict
from datetime import datetime

from beachscout.config.schema import TideCollisionPolicy
from beachscout.models.common import round_half_up
from beachscout.models.forecast import TidePoint, WeatherSeries
from beachscout.models.records import HourlyRecord

NO_TIDE_HEIGHT = 0.0


def truncate_to_hour(ts: datetime) -> datetime:
    return ts.replace(minute=0, second=0, microsecond=0)


def build_tide_lookup(
    tides: list[TidePoint],
    policy: TideCollisionPolicy = TideCollisionPolicy.LAST,
) -> dict[datetime, float]:
    """Map each hour-truncated tide timestamp to a height.

    Several points can land in the same hour when the station reports at
    sub-hourly resolution; `policy` decides which height the hour keeps.
    """
    if policy == TideCollisionPolicy.MEAN:
        buckets: dict[datetime, list[float]] = defaultdict(list)
        for point in tides:
            buckets[truncate_to_hour(point.timestamp)].append(point.height)
        return {hour: sum(hs) / len(hs) for hour, hs in buckets.items()}

    lookup: dict[datetime, float] = {}
    for point in tides:
        hour = truncate_to_hour(point.timestamp)
        if policy == TideCollisionPolicy.FIRST and hour in lookup:
            continue
        lookup[hour] = point.height
    return lookup


def fuse_hourly(
    location_id: str,
    weather: WeatherSeries,
    tides: list[TidePoint],
    policy: TideCollisionPolicy = TideCollisionPolicy.LAST,
) -> list[HourlyRecord]:
    """Build one HourlyRecord per weather hour, in weather order.

    Tide data never adds or removes hours. Hours without an aligned tide
    point get a tide height of 0.
    """
    tide_lookup = build_tide_lookup(tides, policy)
    hourly = weather.hourly

    records: list[HourlyRecord] = []
    for i, ts in enumerate(hourly.time):
        hour = truncate_to_hour(datetime.fromisoformat(ts))
        records.append(
            HourlyRecord(
                location_id=location_id,
                timestamp=ts,
                temp_air=round_half_up(hourly.temperature_2m[i]),
                temp_feels_like=round_half_up(hourly.apparent_temperature[i]),
                humidity=hourly.relative_humidity_2m[i],
                wind_speed=round_half_up(hourly.wind_speed_10m[i]),
                precip_chance=hourly.precipitation_probability[i],
                uv_index=hourly.uv_index[i],
                tide_height=tide_lookup.get(hour, NO_TIDE_HEIGHT),
            )
        )
    return records
