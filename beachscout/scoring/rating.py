"""Day rating: threshold deductions and crowd labeling."""

from datetime import date

from beachscout.config.schema import ScoringConfig
from beachscout.models.records import CrowdLevel

MAX_SCORE = 100
MIN_SCORE = 0


def score_day(
    wind_max: float | None,
    temp_max: float | None,
    temp_min: float | None,
    precip_max: float | None,
    config: ScoringConfig,
) -> int:
    """Score a day from 100 down, one independent deduction per unmet threshold.

    Missing inputs never deduct. The result is floored at 0.
    """
    score = MAX_SCORE
    if wind_max is not None and wind_max > config.max_wind_mph:
        score -= config.wind_penalty
    if temp_max is not None and temp_max > config.max_temp_f:
        score -= config.heat_penalty
    if temp_min is not None and temp_min < config.min_temp_f:
        score -= config.cold_penalty
    if precip_max is not None and precip_max > config.max_precip_pct:
        score -= config.rain_penalty
    return max(MIN_SCORE, score)


def crowd_level(day: date | str, score: int, config: ScoringConfig) -> CrowdLevel:
    """Weekends are always a party; nice weekdays draw a moderate crowd."""
    if isinstance(day, str):
        day = date.fromisoformat(day)
    if day.weekday() >= 5:  # Saturday=5, Sunday=6
        return CrowdLevel.PARTY
    if score > config.moderate_min_score:
        return CrowdLevel.MODERATE
    return CrowdLevel.QUIET
