# SPDX-License-Identifier: MIT

from collections.abc import Collection, Iterable
from typing import Optional

from hourline import time
from hourline.errors import MalformedDateError
from hourline.model.bucket import DIMENSIONS, Bucket, DimensionType
from hourline.model.granularity_type import GranularityType
from hourline.model.summary import Aggregation, PlanningTotals, Summary, TrendType
from hourline.model.time_entry import TimeEntry
from hourline.service.breakdown import Breakdown, dimension_key
from hourline.service.bucket import bucket_key_for, build_buckets
from hourline.time import DateLike


def is_planning_entry(entry: TimeEntry) -> bool:
    return bool(entry.get("is_planning_hours", False))


def has_positive_hours(entry: TimeEntry) -> bool:
    hours = entry.get("hours")
    return hours is not None and float(hours) > 0


def is_countable(entry: TimeEntry, planning: bool = False) -> bool:
    """
    Whether an entry takes part in an aggregation.

    Entries with no date or with non-positive hours are dropped, and planning
    entries are only ever counted together with other planning entries.
    """
    if is_planning_entry(entry) != planning:
        return False
    if not entry.get("date"):
        return False
    return has_positive_hours(entry)


def _validate_dimensions(dimensions: Iterable[DimensionType]) -> tuple[DimensionType, ...]:
    validated = tuple(dict.fromkeys(dimensions))
    for dimension in validated:
        if dimension not in DIMENSIONS:
            raise ValueError(f"Unknown breakdown dimension: {dimension}")
    return validated


def assign_entries(
    entries: Iterable[TimeEntry],
    buckets: list[Bucket],
    planning: bool = False,
    skip_malformed: bool = False,
) -> dict[str, list[TimeEntry]]:
    """
    Group countable entries by the key of the bucket they fall into.

    The bucket key is derived from each entry's own date, so assignment is a
    dictionary lookup rather than a scan over the buckets. Entries whose key
    matches no bucket are outside the requested range and are dropped.

    Args:
        entries: Time entries to assign
        buckets: Buckets produced by build_buckets
        planning: Assign planning entries instead of hours spent
        skip_malformed: Drop entries with unparseable dates instead of raising

    Returns:
        Mapping of bucket key to the entries assigned to it, one key per bucket

    Raises:
        MalformedDateError: If an entry date can not be parsed and
            skip_malformed is False
    """
    assigned: dict[str, list[TimeEntry]] = {bucket["key"]: [] for bucket in buckets}
    if not buckets:
        return assigned

    granularity = buckets[0]["granularity"]

    for entry in entries:
        if not is_countable(entry, planning):
            continue
        date = entry["date"]
        assert date is not None
        try:
            key = bucket_key_for(date, granularity)
        except MalformedDateError:
            if skip_malformed:
                continue
            raise
        if key in assigned:
            assigned[key].append(entry)

    return assigned


def aggregate(
    entries: Iterable[TimeEntry],
    buckets: list[Bucket],
    dimensions: Iterable[DimensionType] = ("user",),
    planning: bool = False,
    skip_malformed: bool = False,
) -> list[Bucket]:
    """
    Fold time entries into buckets with per-dimension breakdowns.

    The given buckets are treated as templates: new bucket dicts are returned
    with totals accumulated from zero, and neither the buckets nor the entries
    are modified.

    Args:
        entries: Time entries to aggregate
        buckets: Buckets produced by build_buckets
        dimensions: Breakdown dimensions to fill ("user", "task", "project")
        planning: Aggregate planning entries instead of hours spent
        skip_malformed: Drop entries with unparseable dates instead of raising

    Returns:
        New buckets, in the same order, with totals and breakdowns filled
    """
    requested = _validate_dimensions(dimensions)
    assigned = assign_entries(entries, buckets, planning, skip_malformed)

    result: list[Bucket] = []
    for bucket in buckets:
        bucket_entries = assigned[bucket["key"]]
        breakdowns = {dimension: Breakdown(dimension) for dimension in requested}

        total_hours = 0.0
        for entry in bucket_entries:
            total_hours += float(entry["hours"])
            for breakdown in breakdowns.values():
                breakdown.add(entry)

        result.append(
            {
                "key": bucket["key"],
                "granularity": bucket["granularity"],
                "start": bucket["start"],
                "end": bucket["end"],
                "label": bucket["label"],
                "total_hours": total_hours,
                "entry_count": len(bucket_entries),
                "by_user": breakdowns["user"].to_dict() if "user" in breakdowns else {},
                "by_task": breakdowns["task"].to_dict() if "task" in breakdowns else {},
                "by_project": (
                    breakdowns["project"].to_dict() if "project" in breakdowns else {}
                ),
            }
        )

    return result


def _trend(buckets: list[Bucket]) -> tuple[TrendType, float]:
    mid_point = len(buckets) // 2
    first_half = buckets[:mid_point]
    second_half = buckets[mid_point:]

    first_average = sum(b["total_hours"] for b in first_half) / max(1, len(first_half))
    second_average = sum(b["total_hours"] for b in second_half) / max(
        1, len(second_half)
    )

    trend: TrendType = "stable"
    if second_average > first_average:
        trend = "up"
    elif second_average < first_average:
        trend = "down"

    if first_average == 0:
        return trend, 0.0
    return trend, (second_average - first_average) / first_average * 100


def summarize(
    buckets: list[Bucket], entries: Optional[Iterable[TimeEntry]] = None
) -> Summary:
    """
    Compute range level statistics over aggregated buckets.

    Args:
        buckets: Aggregated buckets in ascending order
        entries: The entries that contributed to the buckets, used for the
            distinct user/task/project counts (counts are 0 when omitted)

    Returns:
        Summary with totals, extremes and the first-half/second-half trend
    """
    contributing = list(entries) if entries is not None else []
    total_hours = sum(bucket["total_hours"] for bucket in buckets)

    max_bucket: Optional[Bucket] = None
    min_bucket: Optional[Bucket] = None
    for bucket in buckets:
        if max_bucket is None or bucket["total_hours"] > max_bucket["total_hours"]:
            max_bucket = bucket
        if min_bucket is None or bucket["total_hours"] < min_bucket["total_hours"]:
            min_bucket = bucket

    trend, trend_percent = _trend(buckets)

    return {
        "total_hours": total_hours,
        "average_per_bucket": total_hours / len(buckets) if buckets else 0.0,
        "max_hours": max_bucket["total_hours"] if max_bucket is not None else 0.0,
        "max_bucket": max_bucket["key"] if max_bucket is not None else None,
        "min_hours": min_bucket["total_hours"] if min_bucket is not None else 0.0,
        "min_bucket": min_bucket["key"] if min_bucket is not None else None,
        "trend": trend,
        "trend_percent": trend_percent,
        "bucket_count": len(buckets),
        "entry_count": sum(bucket["entry_count"] for bucket in buckets),
        "unique_users": len({dimension_key(e, "user") for e in contributing}),
        "unique_tasks": len({dimension_key(e, "task") for e in contributing}),
        "unique_projects": len({dimension_key(e, "project") for e in contributing}),
    }


def aggregate_range(
    entries: Iterable[TimeEntry],
    start: DateLike,
    end: DateLike,
    granularity: GranularityType,
    dimensions: Iterable[DimensionType] = ("user",),
    planning: bool = False,
    skip_malformed: bool = False,
) -> Aggregation:
    """
    Build buckets for a range, aggregate the entries dated inside it and
    summarize the result.

    Entries dated outside [start, end] are dropped even when a week or month
    bucket extends past the range, so the bucket totals add up to the hours
    logged inside the range.
    """
    range_start = time.as_date(start)
    range_end = time.as_date(end)
    buckets = build_buckets(range_start, range_end, granularity)

    in_range: list[TimeEntry] = []
    for entry in entries:
        if not is_countable(entry, planning):
            continue
        date = entry["date"]
        assert date is not None
        try:
            day = time.parse_key(date)
        except MalformedDateError:
            if skip_malformed:
                continue
            raise
        if range_start <= day <= range_end:
            in_range.append(entry)

    aggregated = aggregate(in_range, buckets, dimensions, planning)
    return {"buckets": aggregated, "summary": summarize(aggregated, in_range)}


def planning_totals(
    entries: Iterable[TimeEntry],
    completed_task_ids: Optional[Collection[str]] = None,
) -> PlanningTotals:
    """
    Sum planning (story point) entries, kept apart from hours spent.

    Args:
        entries: Time entries, only planning-flagged ones with positive
            hours are counted
        completed_task_ids: Tasks considered done, their planning hours are
            also summed into "completed"

    Returns:
        Overall, completed and per-task planning totals
    """
    completed_ids = set(completed_task_ids or [])
    total = 0.0
    completed = 0.0
    by_task: dict[str, float] = {}

    for entry in entries:
        if not is_planning_entry(entry) or not has_positive_hours(entry):
            continue
        hours = float(entry["hours"])
        task_key = dimension_key(entry, "task")
        total += hours
        by_task[task_key] = by_task.get(task_key, 0.0) + hours
        if entry.get("task_id") in completed_ids:
            completed += hours

    return {"total": total, "completed": completed, "by_task": by_task}
