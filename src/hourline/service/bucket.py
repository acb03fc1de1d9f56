# SPDX-License-Identifier: MIT

import datetime

import pendulum

from hourline import time
from hourline.errors import InvalidRangeError
from hourline.model.bucket import Bucket
from hourline.model.granularity_type import GRANULARITIES, GranularityType
from hourline.time import DateLike


def bucket_start_for(date: DateLike, granularity: GranularityType) -> pendulum.Date:
    """
    Get the first day of the bucket containing a date.

    Args:
        date: The date to locate
        granularity: "day", "week", or "month"

    Returns:
        The bucket start (the day itself, its Sunday, or the first of its month)
    """
    day = time.as_date(date)

    if granularity == "day":
        return day
    elif granularity == "week":
        return time.week_start(day)
    elif granularity == "month":
        return day.start_of("month")
    raise ValueError(f"Unknown granularity: {granularity}")


def bucket_key_for(date: DateLike, granularity: GranularityType) -> str:
    """Key of the bucket containing a date, computed without scanning buckets."""
    return time.to_key(bucket_start_for(date, granularity))


def bucket_end_for(start: pendulum.Date, granularity: GranularityType) -> pendulum.Date:
    if granularity == "day":
        return start
    elif granularity == "week":
        return start.add(days=6)
    else:  # granularity == "month"
        return start.end_of("month")


def bucket_label(
    start: datetime.date, end: datetime.date, granularity: GranularityType
) -> str:
    """
    Build the display label for a bucket.

    Weeks inside one month read "Jun 2-8, 2024", weeks crossing a month
    boundary read "Jun 30 - Jul 6, 2024", months read "June 2024" and days
    read "Jun 3".
    """
    first = time.as_date(start)
    last = time.as_date(end)

    if granularity == "day":
        return first.format("MMM D")
    elif granularity == "week":
        if first.month == last.month:
            return f"{first.format('MMM D')}-{last.day}, {first.year}"
        return f"{first.format('MMM D')} - {last.format('MMM D')}, {first.year}"
    else:  # granularity == "month"
        return first.format("MMMM YYYY")


def empty_bucket(start: pendulum.Date, granularity: GranularityType) -> Bucket:
    end = bucket_end_for(start, granularity)
    return {
        "key": time.to_key(start),
        "granularity": granularity,
        "start": start,
        "end": end,
        "label": bucket_label(start, end, granularity),
        "total_hours": 0.0,
        "entry_count": 0,
        "by_user": {},
        "by_task": {},
        "by_project": {},
    }


def build_buckets(
    start: DateLike, end: DateLike, granularity: GranularityType
) -> list[Bucket]:
    """
    Generate the ordered, contiguous, zero-filled buckets spanning a range.

    Week buckets are anchored to the Sunday on or before start and the last
    one may run past end. Month buckets cover every month the range touches.

    Args:
        start: First day of the range (inclusive)
        end: Last day of the range (inclusive)
        granularity: "day", "week", or "month"

    Returns:
        List of empty buckets in ascending order

    Raises:
        InvalidRangeError: If start is after end
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity}")

    range_start = time.as_date(start)
    range_end = time.as_date(end)
    if range_start > range_end:
        raise InvalidRangeError(time.to_key(range_start), time.to_key(range_end))

    buckets: list[Bucket] = []
    current = bucket_start_for(range_start, granularity)

    while current <= range_end:
        buckets.append(empty_bucket(current, granularity))
        if granularity == "day":
            current = current.add(days=1)
        elif granularity == "week":
            current = current.add(weeks=1)
        elif granularity == "month":
            current = current.add(months=1)

    return buckets
