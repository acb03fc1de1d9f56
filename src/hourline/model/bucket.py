# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

import pendulum

from hourline.model.granularity_type import GranularityType
from hourline.model.time_entry import TimeEntry

DimensionType = Literal["user", "task", "project"]

DIMENSIONS: tuple[DimensionType, ...] = ("user", "task", "project")


class BreakdownItem(TypedDict):
    key: str
    total_hours: float
    entries: list[TimeEntry]


class Bucket(TypedDict):
    key: str  # start date key, used for direct lookup
    granularity: GranularityType
    start: pendulum.Date
    end: pendulum.Date  # inclusive last day
    label: str
    total_hours: float
    entry_count: int
    by_user: dict[str, BreakdownItem]
    by_task: dict[str, BreakdownItem]
    by_project: dict[str, BreakdownItem]
