# SPDX-License-Identifier: MIT

from collections.abc import Iterable
from functools import cmp_to_key
from typing import Optional

import pendulum

from hourline import time
from hourline.errors import InvalidRangeError
from hourline.model.period import (
    ClassifiedPeriod,
    Period,
    PeriodProgress,
    PeriodStatus,
)
from hourline.time import DateLike

STATUS_PRIORITY: dict[PeriodStatus, int] = {
    "active": 0,
    "upcoming": 1,
    "completed": 2,
}


def classify(period: Period, today: DateLike) -> PeriodStatus:
    """
    Classify a period relative to today using calendar dates only.

    A period missing either bound is not scheduled yet and is always
    upcoming.
    """
    start = time.as_date_optional(period.get("start"))
    end = time.as_date_optional(period.get("end"))
    if start is None or end is None:
        return "upcoming"

    reference = time.as_date(today)
    if reference < start:
        return "upcoming"
    if reference > end:
        return "completed"
    return "active"


def _compare_values(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_classified(a: ClassifiedPeriod, b: ClassifiedPeriod) -> int:
    """
    Display ordering for classified periods.

    Active periods come first, then upcoming soonest first, then completed
    most recent first. Active and completed periods are ordered by start
    descending. Periods without a start sort last within their status, and
    remaining ties are broken by id.
    """
    priority = _compare_values(STATUS_PRIORITY[a["status"]], STATUS_PRIORITY[b["status"]])
    if priority != 0:
        return priority

    a_start = time.as_date_optional(a["period"].get("start"))
    b_start = time.as_date_optional(b["period"].get("start"))

    if a_start is None and b_start is not None:
        return 1
    if a_start is not None and b_start is None:
        return -1
    if a_start is not None and b_start is not None and a_start != b_start:
        if a["status"] == "upcoming":
            return _compare_values(a_start, b_start)
        return _compare_values(b_start, a_start)

    return _compare_values(a["period"].get("id") or "", b["period"].get("id") or "")


def compare_periods(a: Period, b: Period, today: DateLike) -> int:
    return compare_classified(
        {"period": a, "status": classify(a, today)},
        {"period": b, "status": classify(b, today)},
    )


def classify_periods(periods: Iterable[Period], today: DateLike) -> list[ClassifiedPeriod]:
    return [{"period": period, "status": classify(period, today)} for period in periods]


def sort_periods(periods: Iterable[Period], today: DateLike) -> list[ClassifiedPeriod]:
    """Classify periods and return them in display order."""
    return sorted(classify_periods(periods, today), key=cmp_to_key(compare_classified))


def business_days(start: DateLike, end: DateLike) -> int:
    """Count Monday to Friday days from start to end inclusive."""
    current = time.as_date(start)
    last = time.as_date(end)

    count = 0
    while current <= last:
        # isoweekday: Saturday=6, Sunday=7
        if current.isoweekday() < 6:
            count += 1
        current = current.add(days=1)
    return count


def period_progress(period: Period, today: DateLike) -> Optional[PeriodProgress]:
    """
    Business days completed and remaining for a scheduled period.

    Today counts as completed while the period is active, so remaining days
    start tomorrow.

    Returns:
        The progress, or None when the period is not scheduled
    """
    start = time.as_date_optional(period.get("start"))
    end = time.as_date_optional(period.get("end"))
    if start is None or end is None:
        return None

    reference = time.as_date(today)
    total_days = business_days(start, end)

    if reference < start:
        return {"days_completed": 0, "days_remaining": total_days, "total_days": total_days}
    if reference > end:
        return {"days_completed": total_days, "days_remaining": 0, "total_days": total_days}

    return {
        "days_completed": business_days(start, reference),
        "days_remaining": business_days(reference.add(days=1), end),
        "total_days": total_days,
    }


def period_bounds(
    period: Period, parent: Optional[tuple[pendulum.Date, pendulum.Date]] = None
) -> Optional[tuple[pendulum.Date, pendulum.Date]]:
    """
    Start and end dates of a period, inheriting missing bounds from its parent.

    Returns:
        Tuple of (start, end), or None when a bound is still missing

    Raises:
        InvalidRangeError: If the resolved start is after the resolved end
    """
    start = time.as_date_optional(period.get("start"))
    end = time.as_date_optional(period.get("end"))
    if parent is not None:
        start = start if start is not None else parent[0]
        end = end if end is not None else parent[1]
    if start is None or end is None:
        return None
    if start > end:
        raise InvalidRangeError(time.to_key(start), time.to_key(end))
    return start, end
