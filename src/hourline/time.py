# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, Union

import pendulum

from hourline.errors import MalformedDateError

DateLike = Union[str, datetime.date]


def parse_key(key: str) -> pendulum.Date:
    """
    Parse a 'YYYY-MM-DD' key into a calendar date.

    Anything after the date portion (a 'T' time part or a space separated
    time) is discarded, never interpreted, so an offset can not move the
    date into a neighbouring day.
    """
    if not isinstance(key, str):
        raise MalformedDateError(key, "expected a string")

    date_part = key.strip().split("T")[0].split(" ")[0]
    segments = date_part.split("-")
    if len(segments) != 3:
        raise MalformedDateError(key, f"expected 3 segments, got {len(segments)}")
    if not all(segment.isdigit() for segment in segments):
        raise MalformedDateError(key, "segments must be numeric")

    year, month, day = map(int, segments)
    try:
        return pendulum.date(year, month, day)
    except ValueError as e:
        raise MalformedDateError(key, str(e)) from e


def parse_key_optional(key: Optional[str]) -> Optional[pendulum.Date]:
    if key is None or key == "":
        return None
    return parse_key(key)


def to_key(date: datetime.date) -> str:
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def to_key_optional(date: Optional[datetime.date]) -> Optional[str]:
    if date is None:
        return None
    return to_key(date)


def as_date(value: DateLike) -> pendulum.Date:
    """
    Normalize a key, date or datetime to a midnight-free calendar date.

    Datetimes keep their own wall-clock date; no timezone conversion happens.
    """
    if isinstance(value, str):
        return parse_key(value)
    if isinstance(value, datetime.datetime):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, datetime.date):
        return pendulum.date(value.year, value.month, value.day)
    raise MalformedDateError(value, "expected a date key, date or datetime")


def as_date_optional(value: Optional[DateLike]) -> Optional[pendulum.Date]:
    if value is None or value == "":
        return None
    return as_date(value)


def week_start(date: DateLike) -> pendulum.Date:
    """Return the Sunday on or before the given date."""
    day = as_date(date)
    # isoweekday: Monday=1 ... Sunday=7
    return day.subtract(days=day.isoweekday() % 7)


def month_start(date: DateLike) -> pendulum.Date:
    return as_date(date).start_of("month")


def month_end(date: DateLike) -> pendulum.Date:
    return as_date(date).end_of("month")


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days from start to end, negative when end precedes start."""
    return as_date(start).diff(as_date(end), False).in_days()


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def date_to_display_str(date: datetime.date) -> str:
    return as_date(date).format("MMM D")


def date_to_display_long_str(date: datetime.date) -> str:
    return as_date(date).format("MMM D, YYYY")
