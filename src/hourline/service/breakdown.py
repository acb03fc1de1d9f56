# SPDX-License-Identifier: MIT

from collections.abc import Iterable
from copy import deepcopy
from typing import Optional

from hourline.model.bucket import BreakdownItem, Bucket, DimensionType
from hourline.model.time_entry import TimeEntry

UNASSIGNED_KEY = "unassigned"

DIMENSION_FIELDS: dict[DimensionType, str] = {
    "user": "user_id",
    "task": "task_id",
    "project": "project_id",
}


def dimension_key(entry: TimeEntry, dimension: DimensionType) -> str:
    value = entry.get(DIMENSION_FIELDS[dimension])
    if value is None or value == "":
        return UNASSIGNED_KEY
    return str(value)


def bucket_breakdown(bucket: Bucket, dimension: DimensionType) -> dict[str, BreakdownItem]:
    if dimension == "user":
        return bucket["by_user"]
    elif dimension == "task":
        return bucket["by_task"]
    return bucket["by_project"]


def rank_items(items: Iterable[BreakdownItem]) -> list[BreakdownItem]:
    """Order breakdown items by total hours descending, ties broken by key."""
    return sorted(items, key=lambda item: (-item["total_hours"], item["key"]))


class Breakdown:
    """
    Accumulates hours and entries per key along one dimension.

    Repeated keys accumulate. An entry with an id is kept once per key even
    if it is added again.
    """

    def __init__(self, dimension: DimensionType) -> None:
        self.dimension = dimension
        self._items: dict[str, BreakdownItem] = {}
        self._seen_ids: dict[str, set[str]] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def add(self, entry: TimeEntry, key: Optional[str] = None) -> None:
        if key is None:
            key = dimension_key(entry, self.dimension)

        item = self._items.get(key)
        if item is None:
            item = {"key": key, "total_hours": 0.0, "entries": []}
            self._items[key] = item
            self._seen_ids[key] = set()

        entry_id = entry.get("id")
        if entry_id is not None:
            if entry_id in self._seen_ids[key]:
                return
            self._seen_ids[key].add(entry_id)

        item["total_hours"] += float(entry["hours"])
        item["entries"].append(entry)

    def total(self, key: str) -> float:
        item = self._items.get(key)
        return item["total_hours"] if item is not None else 0.0

    def ranked(self) -> list[BreakdownItem]:
        return rank_items(self.to_dict().values())

    def to_dict(self) -> dict[str, BreakdownItem]:
        return deepcopy(self._items)
