import datetime as dt

import pytest

from hourline.errors import InvalidRangeError
from hourline.service.period import (
    business_days,
    classify,
    compare_periods,
    period_bounds,
    period_progress,
    sort_periods,
)


def _period(period_id, start, end, children=None):
    period = {"id": period_id, "name": period_id.title(), "start": start, "end": end}
    if children is not None:
        period["children"] = children
    return period


SPRINT = _period("sprint", "2024-06-03", "2024-06-14")


@pytest.mark.parametrize(
    "today, status",
    [
        ("2024-06-02", "upcoming"),
        ("2024-06-03", "active"),
        ("2024-06-10", "active"),
        ("2024-06-14", "active"),
        ("2024-06-15", "completed"),
    ],
)
def test_classify_by_calendar_date(today, status):
    assert classify(SPRINT, today) == status


def test_classify_ignores_time_of_day():
    period = _period("sprint", "2024-06-03T18:00:00Z", "2024-06-14T00:00:00-05:00")

    assert classify(period, "2024-06-14") == "active"


def test_unscheduled_period_is_upcoming():
    assert classify(_period("backlog", None, None), "2024-06-10") == "upcoming"
    assert classify(_period("half", "2024-06-01", None), "2024-06-10") == "upcoming"


def test_sort_periods_orders_by_status_then_start():
    periods = [
        _period("old", "2024-04-01", "2024-04-14"),
        _period("next", "2024-06-17", "2024-06-28"),
        _period("later", "2024-07-01", "2024-07-12"),
        _period("now", "2024-06-03", "2024-06-14"),
        _period("older", "2024-03-01", "2024-03-14"),
        _period("backlog", None, None),
        _period("recent", "2024-05-01", "2024-05-14"),
    ]

    ordered = sort_periods(periods, "2024-06-10")

    assert [c["period"]["id"] for c in ordered] == [
        "now",
        "next",
        "later",
        "backlog",
        "recent",
        "old",
        "older",
    ]
    assert [c["status"] for c in ordered] == [
        "active",
        "upcoming",
        "upcoming",
        "upcoming",
        "completed",
        "completed",
        "completed",
    ]


def test_active_periods_are_newest_first():
    periods = [
        _period("long", "2024-05-01", "2024-06-30"),
        _period("short", "2024-06-03", "2024-06-14"),
    ]

    ordered = sort_periods(periods, "2024-06-10")

    assert [c["period"]["id"] for c in ordered] == ["short", "long"]


def test_sort_ties_are_broken_by_id():
    periods = [
        _period("b", "2024-06-17", "2024-06-28"),
        _period("a", "2024-06-17", "2024-06-21"),
    ]

    assert [c["period"]["id"] for c in sort_periods(periods, "2024-06-10")] == ["a", "b"]
    assert compare_periods(periods[1], periods[0], "2024-06-10") < 0


def test_sort_does_not_modify_input():
    periods = [_period("b", "2024-06-17", "2024-06-28"), _period("a", "2024-06-01", "2024-06-05")]

    sort_periods(periods, "2024-06-10")

    assert [p["id"] for p in periods] == ["b", "a"]


def test_business_days_skips_weekends():
    assert business_days("2024-06-03", "2024-06-14") == 10
    assert business_days("2024-06-01", "2024-06-02") == 0
    assert business_days("2024-06-07", "2024-06-10") == 2
    assert business_days("2024-06-10", "2024-06-03") == 0


@pytest.mark.parametrize(
    "today, completed, remaining",
    [
        ("2024-06-01", 0, 10),
        ("2024-06-03", 1, 9),
        ("2024-06-05", 3, 7),
        ("2024-06-09", 5, 5),
        ("2024-06-14", 10, 0),
        ("2024-06-20", 10, 0),
    ],
)
def test_period_progress(today, completed, remaining):
    progress = period_progress(SPRINT, today)

    assert progress == {
        "days_completed": completed,
        "days_remaining": remaining,
        "total_days": 10,
    }


def test_period_progress_of_unscheduled_period():
    assert period_progress(_period("backlog", None, None), "2024-06-10") is None


def test_period_bounds_inherit_from_parent():
    parent = period_bounds(SPRINT)
    assert parent is not None

    start, end = period_bounds(_period("task", None, "2024-06-07"), parent)

    assert start == parent[0]
    assert end == dt.date(2024, 6, 7)
    assert period_bounds(_period("task", None, None)) is None


def test_period_bounds_reject_start_after_end():
    with pytest.raises(InvalidRangeError):
        period_bounds(_period("x", "2024-06-10", "2024-06-01"))
