# SPDX-License-Identifier: MIT

from collections.abc import Iterable
from typing import Optional

import pendulum

from hourline import time
from hourline.errors import DegenerateRangeError
from hourline.model.period import Period
from hourline.model.timeline_marker import MarkerDayType, TimelineMarker
from hourline.time import DateLike

MARKER_DAYS: tuple[tuple[int, MarkerDayType], ...] = ((1, "monday"), (5, "friday"))


def position(date: DateLike, range_start: DateLike, range_end: DateLike) -> float:
    """
    Map a date onto a 0-100 horizontal position within a timeline.

    Day differences are whole days between calendar dates, so every chart
    using the same range lines up. Dates outside the range give positions
    below 0 or above 100; the result is not clamped.

    Args:
        date: The date to place
        range_start: First day of the timeline (position 0)
        range_end: Last day of the timeline (position 100)

    Returns:
        Position as a percentage of the timeline width

    Raises:
        DegenerateRangeError: If range_start and range_end are the same day
    """
    total_days = time.days_between(range_start, range_end)
    if total_days == 0:
        raise DegenerateRangeError(
            time.to_key(time.as_date(range_start)), time.to_key(time.as_date(range_end))
        )
    return time.days_between(range_start, date) / total_days * 100


def span(
    start: DateLike, end: DateLike, range_start: DateLike, range_end: DateLike
) -> tuple[float, float]:
    """Left offset and width percentages of a bar running from start to end."""
    left = position(start, range_start, range_end)
    right = position(end, range_start, range_end)
    return left, right - left


def today_position(
    today: DateLike, range_start: DateLike, range_end: DateLike
) -> Optional[float]:
    """Position of the today marker, or None when today is off the timeline."""
    today_percent = position(today, range_start, range_end)
    if 0 <= today_percent <= 100:
        return today_percent
    return None


def week_markers(range_start: DateLike, range_end: DateLike) -> list[TimelineMarker]:
    """
    Generate Monday and Friday markers for every week touching the timeline.

    Weeks are walked from the Sunday on or before range_start; markers
    falling outside the range are left out.

    Returns:
        Markers in date order with their position, "Jun 3" style label and
        whether they fall within the first seven days of a month
    """
    timeline_start = time.as_date(range_start)
    timeline_end = time.as_date(range_end)

    markers: list[TimelineMarker] = []
    current = time.week_start(timeline_start)

    while current <= timeline_end:
        for offset, day_type in MARKER_DAYS:
            marker_date = current.add(days=offset)
            if marker_date < timeline_start or marker_date > timeline_end:
                continue
            markers.append(
                {
                    "date": marker_date,
                    "position": position(marker_date, timeline_start, timeline_end),
                    "label": time.date_to_display_str(marker_date),
                    "is_month_start": marker_date.day <= 7,
                    "day_type": day_type,
                }
            )
        current = current.add(weeks=1)

    return markers


def default_timeline_range(
    periods: Iterable[Period],
    today: DateLike,
    lead_days: int = 7,
    padding_days: int = 14,
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    Pick the timeline range for a sprint chart.

    The timeline starts lead_days before today and ends padding_days after
    the latest period end, or padding_days after today + padding_days when no
    period ends later than that.

    Args:
        periods: Periods to show, unscheduled ones are ignored
        today: The reference day
        lead_days: Days of history shown before today
        padding_days: Days of space shown after the latest end

    Returns:
        Tuple of (start, end) dates
    """
    if lead_days < 0 or padding_days < 0:
        raise ValueError("lead_days and padding_days can not be negative")

    reference = time.as_date(today)
    latest_end = reference.add(days=padding_days)

    for period in periods:
        period_end = time.as_date_optional(period.get("end"))
        if period_end is not None and period_end > latest_end:
            latest_end = period_end

    return reference.subtract(days=lead_days), latest_end.add(days=padding_days)
