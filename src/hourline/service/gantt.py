# SPDX-License-Identifier: MIT

from collections.abc import Iterable
from typing import Optional

import pendulum

from hourline import time
from hourline.color import status_color
from hourline.errors import InvalidRangeError
from hourline.model.layout_node import LayoutNode
from hourline.model.period import ClassifiedPeriod, Period, PeriodStatus
from hourline.service.period import STATUS_PRIORITY, classify, period_bounds
from hourline.service.timeline import span
from hourline.time import DateLike

DEFAULT_ROW_UNIT = 32
DEFAULT_MIN_BAR_HEIGHT = 40
DEFAULT_ROW_MARGIN = 20
DEFAULT_CHART_PADDING = 40


def row_height(child_count: int, row_unit: float, min_height: float) -> float:
    return max(child_count * row_unit, min_height)


def _layout_children(
    children: list[Period],
    parent_start: pendulum.Date,
    parent_end: pendulum.Date,
    parent_status: PeriodStatus,
    row_unit: float,
    today: Optional[DateLike],
) -> list[LayoutNode]:
    nodes: list[LayoutNode] = []

    for index, child in enumerate(children):
        bounds = period_bounds(child, (parent_start, parent_end))
        assert bounds is not None
        child_start, child_end = bounds

        if today is not None:
            status = classify(
                {
                    "id": child.get("id"),
                    "name": child.get("name"),
                    "start": time.to_key(child_start),
                    "end": time.to_key(child_end),
                },
                today,
            )
        else:
            status = parent_status

        # Children are placed against the parent's own bar
        if parent_start == parent_end:
            left, width = 0.0, 100.0
        else:
            left, width = span(child_start, child_end, parent_start, parent_end)

        grandchildren = child.get("children") or []
        nodes.append(
            {
                "id": child.get("id"),
                "name": child.get("name"),
                "status": status,
                "priority": STATUS_PRIORITY[status],
                "color": status_color(status),
                "start": time.to_key(child_start),
                "end": time.to_key(child_end),
                "left_percent": left,
                "width_percent": width,
                "top": index * row_unit,
                "height": row_height(len(grandchildren), row_unit, row_unit),
                "children": _layout_children(
                    grandchildren, child_start, child_end, status, row_unit, today
                ),
            }
        )

    return nodes


def layout(
    periods: Iterable[ClassifiedPeriod],
    range_start: DateLike,
    range_end: DateLike,
    row_unit: float = DEFAULT_ROW_UNIT,
    min_bar_height: float = DEFAULT_MIN_BAR_HEIGHT,
    row_margin: float = DEFAULT_ROW_MARGIN,
    today: Optional[DateLike] = None,
) -> list[LayoutNode]:
    """
    Lay out classified periods as bars on a shared timeline.

    Top-level bars are positioned against the timeline range and stacked in
    list order, one band each; overlapping periods are not moved to avoid
    each other. Children are positioned against their parent's own start and
    end so they fill the parent bar, and a child without dates inherits the
    parent's. Unscheduled top-level periods are left out.

    Args:
        periods: Classified periods, usually from sort_periods
        range_start: First day of the timeline
        range_end: Last day of the timeline
        row_unit: Height of one child row
        min_bar_height: Minimum height of a top-level band
        row_margin: Vertical gap between top-level bands
        today: When given, children are classified against it instead of
            taking their parent's status

    Returns:
        Layout nodes in input order

    Raises:
        InvalidRangeError: If range_start is after range_end, or a period
            starts after it ends
        DegenerateRangeError: If range_start and range_end are the same day
    """
    timeline_start = time.as_date(range_start)
    timeline_end = time.as_date(range_end)
    if timeline_start > timeline_end:
        raise InvalidRangeError(time.to_key(timeline_start), time.to_key(timeline_end))

    nodes: list[LayoutNode] = []
    top = 0.0

    for classified in periods:
        period = classified["period"]
        bounds = period_bounds(period)
        if bounds is None:
            continue
        period_start, period_end = bounds
        status = classified["status"]

        left, width = span(period_start, period_end, timeline_start, timeline_end)
        children = period.get("children") or []
        height = row_height(len(children), row_unit, min_bar_height)

        nodes.append(
            {
                "id": period.get("id"),
                "name": period.get("name"),
                "status": status,
                "priority": STATUS_PRIORITY[status],
                "color": status_color(status),
                "start": time.to_key(period_start),
                "end": time.to_key(period_end),
                "left_percent": left,
                "width_percent": width,
                "top": top,
                "height": height,
                "children": _layout_children(
                    children, period_start, period_end, status, row_unit, today
                ),
            }
        )
        top += height + row_margin

    return nodes


def total_height(
    nodes: Iterable[LayoutNode],
    row_margin: float = DEFAULT_ROW_MARGIN,
    padding: float = DEFAULT_CHART_PADDING,
) -> float:
    """Height of the whole chart: every band plus its margin, plus padding."""
    return sum(node["height"] + row_margin for node in nodes) + padding
