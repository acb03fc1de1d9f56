# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from hourline import time
from hourline.errors import MalformedDateError
from hourline.model.bucket import DIMENSIONS, DimensionType
from hourline.model.granularity_type import GRANULARITIES, GranularityType
from hourline.service.date_range import RANGE_PRESETS, RangePresetType


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param).strip()

    # Match YYYY-MM-DD format (any time component is ignored)
    if re.match(r"\d{4}-\d{1,2}-\d{1,2}", date):
        try:
            return time.parse_key(date)
        except MalformedDateError as e:
            raise typer.BadParameter(str(e))

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return time.today_local().add(days=int(date))

    if date == "today" or date == "t":
        return time.today_local()
    if date == "yesterday" or date == "y":
        return time.today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return time.today_local().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_granularity(granularity: Optional[str]) -> Optional[GranularityType]:
    if granularity is None:
        return None
    if granularity not in GRANULARITIES:
        raise typer.BadParameter(
            f"Granularity must be one of {', '.join(GRANULARITIES)}, got {granularity}"
        )
    return granularity  # type: ignore[return-value]


def parse_dimensions(dimensions: Optional[list[str]]) -> list[DimensionType]:
    if not dimensions:
        return ["user"]

    parsed: list[DimensionType] = []
    for value in dimensions:
        for dimension in value.split(","):
            dimension = dimension.strip()
            if dimension not in DIMENSIONS:
                raise typer.BadParameter(
                    f"Breakdown must be one of {', '.join(DIMENSIONS)}, got {dimension}"
                )
            parsed.append(dimension)  # type: ignore[arg-type]
    return list(dict.fromkeys(parsed))


def parse_range_preset(preset: Optional[str]) -> Optional[RangePresetType]:
    if preset is None:
        return None
    if preset not in RANGE_PRESETS or preset == "custom":
        raise typer.BadParameter("Range must be one of week, month, quarter, year")
    return preset  # type: ignore[return-value]
