"""Tests for the Open-Meteo client with mocked httpx."""

import copy

import httpx
import pytest
import respx

from beachscout.ingest.open_meteo_client import (
    DAILY_VARIABLES,
    HOURLY_VARIABLES,
    OpenMeteoClient,
    parse_weather,
)

FORECAST_URL = "https://test-meteo.example.com/v1/forecast"


@pytest.fixture
def client() -> OpenMeteoClient:
    return OpenMeteoClient(base_url="https://test-meteo.example.com/v1", timeout=1.0)


class TestFetchWeather:
    @respx.mock
    def test_success(self, client: OpenMeteoClient, open_meteo_raw: dict):
        respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=open_meteo_raw)
        )

        series = client.fetch_weather(32.7503, -117.2528)
        assert len(series.hourly.time) == 48
        assert series.daily.time == ["2026-10-16", "2026-10-17", "2026-10-18"]
        assert series.timezone == "America/Los_Angeles"
        assert series.utc_offset_seconds == -25200

    @respx.mock
    def test_request_parameters(self, client: OpenMeteoClient, open_meteo_raw: dict):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=open_meteo_raw)
        )

        client.fetch_weather(32.7503, -117.2528)
        params = route.calls[0].request.url.params
        assert params["latitude"] == "32.7503"
        assert params["longitude"] == "-117.2528"
        assert params["temperature_unit"] == "fahrenheit"
        assert params["wind_speed_unit"] == "mph"
        assert params["timezone"] == "auto"
        assert params["forecast_days"] == "7"
        assert params["hourly"].split(",") == list(HOURLY_VARIABLES)
        assert params["daily"].split(",") == list(DAILY_VARIABLES)

    @respx.mock
    def test_user_agent_header(self, client: OpenMeteoClient, open_meteo_raw: dict):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=open_meteo_raw)
        )

        client.fetch_weather(32.7503, -117.2528)
        assert "beachscout" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_server_error_raises(self, client: OpenMeteoClient):
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(httpx.HTTPStatusError):
            client.fetch_weather(32.7503, -117.2528)
        # single best-effort attempt
        assert route.call_count == 1

    @respx.mock
    def test_timeout_raises(self, client: OpenMeteoClient):
        respx.get(FORECAST_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(httpx.TimeoutException):
            client.fetch_weather(32.7503, -117.2528)


class TestParseWeather:
    def test_hourly_values(self, open_meteo_raw: dict):
        series = parse_weather(open_meteo_raw)
        assert series.hourly.time[1] == "2026-10-16T01:00"
        assert series.hourly.temperature_2m[1] == 60.5
        assert series.hourly.wind_speed_10m[32] == 18.0

    def test_nulls_pass_through(self, open_meteo_raw: dict):
        raw = copy.deepcopy(open_meteo_raw)
        raw["hourly"]["uv_index"][47] = None
        series = parse_weather(raw)
        assert series.hourly.uv_index[47] is None

    def test_missing_variable(self, open_meteo_raw: dict):
        raw = copy.deepcopy(open_meteo_raw)
        del raw["daily"]["sunset"]
        with pytest.raises(ValueError, match="daily.sunset"):
            parse_weather(raw)

    def test_misaligned_column(self, open_meteo_raw: dict):
        raw = copy.deepcopy(open_meteo_raw)
        raw["hourly"]["wind_speed_10m"].pop()
        with pytest.raises(ValueError, match="47 entries, expected 48"):
            parse_weather(raw)

    def test_missing_blocks(self):
        with pytest.raises(ValueError, match="hourly/daily"):
            parse_weather({"error": True, "reason": "Invalid latitude"})
