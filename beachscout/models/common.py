"""Common helpers shared across models."""

import math
from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def round_half_up(value: float | None) -> int | None:
    """Round to the nearest integer with halves going up (84.5 -> 85, -2.5 -> -2).

    Unlike round(), halves never go to even. None passes through for missing
    provider values.
    """
    if value is None:
        return None
    return math.floor(value + 0.5)
