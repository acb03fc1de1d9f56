# SPDX-License-Identifier: MIT

from collections.abc import Iterable
from typing import TypedDict

from hourline.model.bucket import BreakdownItem
from hourline.model.dataset import IdentityRecord


class LabeledItem(TypedDict):
    key: str
    label: str
    total_hours: float
    entry_count: int


def names_by_id(records: Iterable[IdentityRecord]) -> dict[str, str]:
    names: dict[str, str] = {}
    for record in records:
        name = record.get("name")
        if name:
            names[str(record["id"])] = name
    return names


def label_breakdown(
    items: Iterable[BreakdownItem], names: dict[str, str]
) -> list[LabeledItem]:
    """Attach display names to breakdown items, falling back to the key."""
    return [
        {
            "key": item["key"],
            "label": names.get(item["key"], item["key"]),
            "total_hours": item["total_hours"],
            "entry_count": len(item["entries"]),
        }
        for item in items
    ]
