# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

PeriodStatus = Literal["upcoming", "active", "completed"]


class Period(TypedDict):
    id: Optional[str]
    name: Optional[str]
    start: Optional[str]
    end: Optional[str]
    task_ids: NotRequired[list[str]]
    children: NotRequired[list["Period"]]


class ClassifiedPeriod(TypedDict):
    period: Period
    status: PeriodStatus


class PeriodProgress(TypedDict):
    days_completed: int
    days_remaining: int
    total_days: int
