# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class TimeEntry(TypedDict):
    id: Optional[str]
    date: Optional[str]  # 'YYYY-MM-DD', may carry a trailing time part
    hours: float
    user_id: Optional[str]
    task_id: Optional[str]
    project_id: Optional[str]
    is_planning_hours: NotRequired[bool]
