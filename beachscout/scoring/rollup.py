"""Daily rollup: groups hourly records by calendar date and scores each day."""

from collections import defaultdict
from collections.abc import Iterable

from beachscout.config.schema import ScoringConfig
from beachscout.models.common import round_half_up
from beachscout.models.forecast import WeatherSeries
from beachscout.models.records import DailySummary, HourlyRecord
from beachscout.scoring.rating import crowd_level, score_day


def group_by_date(hourly: list[HourlyRecord]) -> dict[str, list[HourlyRecord]]:
    """Partition records by the date part of their ISO timestamp (no tz math)."""
    groups: dict[str, list[HourlyRecord]] = defaultdict(list)
    for record in hourly:
        groups[record.timestamp.partition("T")[0]].append(record)
    return dict(groups)


def rollup_daily(
    location_id: str,
    weather: WeatherSeries,
    water_temp: float,
    hourly: list[HourlyRecord],
    config: ScoringConfig,
) -> list[DailySummary]:
    """Build one DailySummary per forecast day that has hourly coverage.

    `water_temp` is a single latest reading, already defaulted by the
    caller, and is repeated on every day.
    """
    by_date = group_by_date(hourly)
    daily = weather.daily

    summaries: list[DailySummary] = []
    for i, day in enumerate(daily.time):
        hours = by_date.get(day)
        if not hours:
            continue

        wind_max = _max_present(h.wind_speed for h in hours)
        humidity_avg = round_half_up(_mean_present(h.humidity for h in hours))
        temp_max = daily.temperature_2m_max[i]
        temp_min = daily.temperature_2m_min[i]

        score = score_day(
            wind_max,
            temp_max,
            temp_min,
            daily.precipitation_probability_max[i],
            config,
        )

        summaries.append(
            DailySummary(
                location_id=location_id,
                date=day,
                sunrise_ts=daily.sunrise[i],
                sunset_ts=daily.sunset[i],
                temp_air_max=round_half_up(temp_max),
                temp_air_min=round_half_up(temp_min),
                temp_water_avg=water_temp,
                humidity_avg=humidity_avg,
                uv_max=daily.uv_index_max[i],
                wind_max=wind_max,
                rating_score=score,
                crowd_level=crowd_level(day, score, config),
            )
        )
    return summaries


def _max_present(values: Iterable[int | None]) -> int | None:
    present = [v for v in values if v is not None]
    return max(present) if present else None


def _mean_present(values: Iterable[float | None]) -> float | None:
    present = [v for v in values if v is not None]
    return sum(present) / len(present) if present else None
