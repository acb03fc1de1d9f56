# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from hourline.model.period import Period
from hourline.model.time_entry import TimeEntry


class IdentityRecord(TypedDict):
    id: str
    name: Optional[str]


class Dataset(TypedDict):
    entries: list[TimeEntry]
    periods: list[Period]
    users: list[IdentityRecord]
    tasks: list[IdentityRecord]
    projects: list[IdentityRecord]
