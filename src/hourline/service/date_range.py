# SPDX-License-Identifier: MIT

from typing import Literal, Optional

import pendulum

from hourline import time
from hourline.errors import InvalidRangeError
from hourline.model.granularity_type import GranularityType
from hourline.time import DateLike

RangePresetType = Literal["week", "month", "quarter", "year", "custom"]

RANGE_PRESETS: tuple[RangePresetType, ...] = ("week", "month", "quarter", "year", "custom")

# Presets long enough to read better grouped by week
WEEKLY_PRESETS: frozenset[RangePresetType] = frozenset({"week", "quarter", "year"})


def preset_range(
    preset: RangePresetType, today: DateLike
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    Get the date range covered by a preset, ending today.

    Args:
        preset: "week" (last 8 weeks), "month" (30 days), "quarter" (90 days)
            or "year" (one year)
        today: The last day of the range

    Returns:
        Tuple of (start, end) dates
    """
    end = time.as_date(today)

    if preset == "week":
        start = end.subtract(days=56)
    elif preset == "month":
        start = end.subtract(days=30)
    elif preset == "quarter":
        start = end.subtract(days=90)
    elif preset == "year":
        start = end.subtract(years=1)
    else:
        raise ValueError(f"Preset {preset!r} has no fixed range")

    return start, end


def suggest_granularity(
    preset: RangePresetType,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    threshold_days: int = 60,
) -> GranularityType:
    """
    Choose between daily and weekly buckets for a chart range.

    Custom ranges switch to weeks once they span more than threshold_days.
    """
    if preset in WEEKLY_PRESETS:
        return "week"
    if preset == "custom" and start is not None and end is not None:
        range_days = time.days_between(start, end)
        if range_days < 0:
            raise InvalidRangeError(start, end)
        if range_days > threshold_days:
            return "week"
    return "day"
