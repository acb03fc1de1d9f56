# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from hourline.model.period import PeriodStatus


class LayoutNode(TypedDict):
    id: Optional[str]
    name: Optional[str]
    status: PeriodStatus
    priority: int
    color: str
    start: str
    end: str
    left_percent: float
    width_percent: float
    top: float  # offset from the top of the parent band
    height: float
    children: list["LayoutNode"]
