"""Tests for hourly fusion: tide alignment, rounding, timeline preservation."""

from datetime import datetime

import pytest

from beachscout.config.schema import TideCollisionPolicy
from beachscout.models.forecast import DailySeries, HourlySeries, TidePoint, WeatherSeries
from beachscout.scoring.fusion import build_tide_lookup, fuse_hourly, truncate_to_hour


def _tide(ts: str, height: float) -> TidePoint:
    return TidePoint(timestamp=datetime.fromisoformat(ts), height=height)


def _weather(times: list[str], **overrides) -> WeatherSeries:
    n = len(times)
    columns = {
        "temperature_2m": [70.0] * n,
        "apparent_temperature": [69.0] * n,
        "relative_humidity_2m": [65.0] * n,
        "wind_speed_10m": [8.0] * n,
        "precipitation_probability": [0.0] * n,
        "uv_index": [3.0] * n,
    }
    columns.update(overrides)
    return WeatherSeries(
        hourly=HourlySeries(time=times, **columns),
        daily=DailySeries(
            time=[], temperature_2m_max=[], temperature_2m_min=[],
            precipitation_probability_max=[], uv_index_max=[], sunrise=[], sunset=[],
        ),
    )


class TestTruncateToHour:
    def test_zeroes_minutes_seconds_micros(self):
        ts = datetime(2026, 10, 16, 13, 42, 17, 123456)
        assert truncate_to_hour(ts) == datetime(2026, 10, 16, 13, 0)


class TestBuildTideLookup:
    def test_sub_hourly_points_collapse(self):
        tides = [
            _tide("2026-10-16 13:00", 1.0),
            _tide("2026-10-16 13:30", 2.0),
            _tide("2026-10-16 14:06", 3.0),
        ]
        lookup = build_tide_lookup(tides)
        assert lookup == {
            datetime(2026, 10, 16, 13): 2.0,
            datetime(2026, 10, 16, 14): 3.0,
        }

    @pytest.mark.parametrize(
        "policy, expected",
        [
            (TideCollisionPolicy.LAST, 3.0),
            (TideCollisionPolicy.FIRST, 1.0),
            (TideCollisionPolicy.MEAN, 2.0),
        ],
    )
    def test_collision_policy(self, policy, expected):
        tides = [
            _tide("2026-10-16 13:00", 1.0),
            _tide("2026-10-16 13:20", 2.0),
            _tide("2026-10-16 13:40", 3.0),
        ]
        assert build_tide_lookup(tides, policy) == {datetime(2026, 10, 16, 13): expected}

    def test_empty(self):
        assert build_tide_lookup([]) == {}


class TestFuseHourly:
    def test_one_record_per_weather_hour_in_order(self, weather: WeatherSeries):
        records = fuse_hourly("obdb", weather, [])
        assert len(records) == len(weather.hourly.time) == 48
        assert [r.timestamp for r in records] == weather.hourly.time
        assert all(r.location_id == "obdb" for r in records)

    def test_tide_matched_by_hour(self, weather: WeatherSeries):
        tides = [
            _tide("2026-10-16 00:00", 3.412),
            _tide("2026-10-16 01:00", 2.998),
            _tide("2026-10-17 12:00", 5.101),
        ]
        records = fuse_hourly("obdb", weather, tides)
        assert records[0].tide_height == 3.412
        assert records[1].tide_height == 2.998
        assert records[36].tide_height == 5.101

    def test_missing_tide_defaults_to_zero(self, weather: WeatherSeries):
        records = fuse_hourly("obdb", weather, [_tide("2026-10-16 00:00", 3.4)])
        assert records[2].tide_height == 0.0
        assert all(r.tide_height == 0.0 for r in records[1:])

    def test_tides_outside_timeline_ignored(self):
        weather = _weather(["2026-10-16T10:00", "2026-10-16T11:00"])
        tides = [_tide("2026-10-15 10:00", 9.9), _tide("2026-10-16 11:24", 4.2)]
        records = fuse_hourly("obdb", weather, tides)
        assert len(records) == 2
        assert [r.tide_height for r in records] == [0.0, 4.2]

    def test_rounding(self, weather: WeatherSeries):
        records = fuse_hourly("obdb", weather, [])
        # 60.5F and 59.5F round half up, not to even
        assert records[1].temp_air == 61
        assert records[1].temp_feels_like == 60
        assert records[32].wind_speed == 18

    def test_passthrough_fields_unrounded(self):
        weather = _weather(
            ["2026-10-16T12:00"],
            relative_humidity_2m=[64.5],
            precipitation_probability=[12.5],
            uv_index=[6.35],
        )
        record = fuse_hourly("obdb", weather, [_tide("2026-10-16 12:00", 1.234)])[0]
        assert record.humidity == 64.5
        assert record.precip_chance == 12.5
        assert record.uv_index == 6.35
        assert record.tide_height == 1.234

    def test_null_values_stay_null(self):
        weather = _weather(["2026-10-16T12:00"], temperature_2m=[None], uv_index=[None])
        record = fuse_hourly("obdb", weather, [])[0]
        assert record.temp_air is None
        assert record.uv_index is None

    def test_mean_policy(self):
        weather = _weather(["2026-10-16T12:00"])
        tides = [_tide("2026-10-16 12:00", 1.0), _tide("2026-10-16 12:30", 2.0)]
        record = fuse_hourly("obdb", weather, tides, TideCollisionPolicy.MEAN)[0]
        assert record.tide_height == 1.5
