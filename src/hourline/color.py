# SPDX-License-Identifier: MIT

from hourline.model.period import PeriodStatus

# Status colors as Rich color names
STATUS_COLORS: dict[PeriodStatus, str] = {
    "upcoming": "bright_blue",
    "active": "dark_orange",
    "completed": "green",
}

UNSCHEDULED_COLOR = "bright_black"

TREND_COLORS = {
    "up": "green",
    "down": "red",
    "stable": "white",
}


def status_color(status: PeriodStatus) -> str:
    return STATUS_COLORS.get(status, UNSCHEDULED_COLOR)
