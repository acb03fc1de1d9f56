# SPDX-License-Identifier: MIT

import datetime
from pathlib import Path
from typing import Any, Optional, cast

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from hourline import time
from hourline.model.dataset import Dataset, IdentityRecord
from hourline.model.period import Period
from hourline.model.time_entry import TimeEntry


def _convert_date_for_deserialization(value: Any) -> Optional[str]:
    # YAML turns unquoted 2024-06-03 into a date, keep the key form
    if value is None:
        return None
    if isinstance(value, datetime.date):
        return time.to_key(value)
    return str(value)


def _convert_entry_for_deserialization(raw_entry: dict[str, Any]) -> TimeEntry:
    return {
        "id": _optional_str(raw_entry.get("id")),
        "date": _convert_date_for_deserialization(raw_entry.get("date")),
        "hours": float(raw_entry.get("hours") or 0),
        "user_id": _optional_str(raw_entry.get("user_id")),
        "task_id": _optional_str(raw_entry.get("task_id")),
        "project_id": _optional_str(raw_entry.get("project_id")),
        "is_planning_hours": bool(raw_entry.get("is_planning_hours", False)),
    }


def _convert_period_for_deserialization(raw_period: dict[str, Any]) -> Period:
    return {
        "id": _optional_str(raw_period.get("id")),
        "name": _optional_str(raw_period.get("name")),
        "start": _convert_date_for_deserialization(raw_period.get("start")),
        "end": _convert_date_for_deserialization(raw_period.get("end")),
        "task_ids": [str(task_id) for task_id in raw_period.get("task_ids") or []],
        "children": [
            _convert_period_for_deserialization(child)
            for child in raw_period.get("children") or []
        ],
    }


def _convert_identity_for_deserialization(raw_record: dict[str, Any]) -> IdentityRecord:
    return {"id": str(raw_record["id"]), "name": _optional_str(raw_record.get("name"))}


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def load_dataset(path: Path) -> Dataset:
    """
    Load entries, periods and identity records from a YAML document.

    Every top-level list is optional. Dates are kept as 'YYYY-MM-DD' keys.
    """
    raw = load(path.read_text(), Loader=Loader)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Dataset file {path} is not a mapping")
    raw = cast(dict[str, Any], raw)

    return {
        "entries": [
            _convert_entry_for_deserialization(e) for e in raw.get("entries") or []
        ],
        "periods": [
            _convert_period_for_deserialization(p) for p in raw.get("periods") or []
        ],
        "users": [
            _convert_identity_for_deserialization(r) for r in raw.get("users") or []
        ],
        "tasks": [
            _convert_identity_for_deserialization(r) for r in raw.get("tasks") or []
        ],
        "projects": [
            _convert_identity_for_deserialization(r) for r in raw.get("projects") or []
        ],
    }
