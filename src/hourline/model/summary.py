# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from hourline.model.bucket import Bucket

TrendType = Literal["up", "down", "stable"]


class Summary(TypedDict):
    total_hours: float
    average_per_bucket: float
    max_hours: float
    max_bucket: Optional[str]
    min_hours: float
    min_bucket: Optional[str]
    trend: TrendType
    trend_percent: float
    bucket_count: int
    entry_count: int
    unique_users: int
    unique_tasks: int
    unique_projects: int


class Aggregation(TypedDict):
    buckets: list[Bucket]
    summary: Summary


class PlanningTotals(TypedDict):
    total: float
    completed: float
    by_task: dict[str, float]
