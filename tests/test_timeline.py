import datetime as dt

import pytest

from hourline.errors import DegenerateRangeError
from hourline.service.timeline import (
    default_timeline_range,
    position,
    span,
    today_position,
    week_markers,
)


def test_position_is_linear_in_days():
    assert position("2024-06-01", "2024-06-01", "2024-06-11") == 0
    assert position("2024-06-06", "2024-06-01", "2024-06-11") == 50
    assert position("2024-06-11", "2024-06-01", "2024-06-11") == 100


def test_position_is_not_clamped():
    assert position("2024-05-31", "2024-06-01", "2024-06-11") == -10
    assert position("2024-06-16", "2024-06-01", "2024-06-11") == 150


def test_position_accepts_dates_and_datetimes():
    assert position(dt.date(2024, 6, 6), dt.date(2024, 6, 1), "2024-06-11") == 50
    assert position(dt.datetime(2024, 6, 6, 23, 59), "2024-06-01", "2024-06-11") == 50


def test_position_on_single_day_range_raises():
    with pytest.raises(DegenerateRangeError):
        position("2024-06-01", "2024-06-01", "2024-06-01")


def test_span_gives_left_and_width():
    left, width = span("2024-06-03", "2024-06-08", "2024-06-01", "2024-06-11")

    assert left == pytest.approx(20)
    assert width == pytest.approx(50)


def test_today_position_only_inside_range():
    assert today_position("2024-06-06", "2024-06-01", "2024-06-11") == 50
    assert today_position("2024-06-12", "2024-06-01", "2024-06-11") is None
    assert today_position("2024-05-31", "2024-06-01", "2024-06-11") is None


def test_week_markers_fall_on_mondays_and_fridays_inside_range():
    markers = week_markers("2024-06-01", "2024-06-14")

    assert [marker["date"] for marker in markers] == [
        dt.date(2024, 6, 3),
        dt.date(2024, 6, 7),
        dt.date(2024, 6, 10),
        dt.date(2024, 6, 14),
    ]
    assert [marker["day_type"] for marker in markers] == [
        "monday",
        "friday",
        "monday",
        "friday",
    ]
    assert [marker["label"] for marker in markers] == ["Jun 3", "Jun 7", "Jun 10", "Jun 14"]
    assert [marker["is_month_start"] for marker in markers] == [True, True, False, False]
    assert markers[-1]["position"] == 100


def test_week_markers_positions_are_ascending():
    markers = week_markers("2024-05-20", "2024-08-20")

    positions = [marker["position"] for marker in markers]
    assert positions == sorted(positions)
    assert all(0 <= p <= 100 for p in positions)


def test_default_timeline_range_without_periods():
    start, end = default_timeline_range([], "2024-06-10")

    assert start == dt.date(2024, 6, 3)
    assert end == dt.date(2024, 7, 8)


def test_default_timeline_range_extends_past_latest_end():
    periods = [
        {"id": "s1", "name": "Sprint 1", "start": "2024-06-01", "end": "2024-06-14"},
        {"id": "s2", "name": "Sprint 2", "start": "2024-07-01", "end": "2024-07-15"},
        {"id": "s3", "name": "Backlog", "start": None, "end": None},
    ]
    start, end = default_timeline_range(periods, "2024-06-10", lead_days=3, padding_days=5)

    assert start == dt.date(2024, 6, 7)
    assert end == dt.date(2024, 7, 20)


def test_default_timeline_range_rejects_negative_padding():
    with pytest.raises(ValueError):
        default_timeline_range([], "2024-06-10", padding_days=-1)
