# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

import pendulum

MarkerDayType = Literal["monday", "friday"]


class TimelineMarker(TypedDict):
    date: pendulum.Date
    position: float
    label: str
    is_month_start: bool
    day_type: MarkerDayType
