# SPDX-License-Identifier: MIT

from typing import TypedDict

import platformdirs

from hourline.model.granularity_type import GranularityType

APP_NAME = "hourline"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"


class Configuration(TypedDict):
    default_granularity: GranularityType
    row_unit: int
    min_bar_height: int
    row_margin: int
    chart_padding: int
    timeline_lead_days: int
    timeline_padding_days: int
    week_grouping_threshold_days: int


DEFAULT_CONFIGURATION: Configuration = {
    "default_granularity": "week",
    "row_unit": 32,
    "min_bar_height": 40,
    "row_margin": 20,
    "chart_padding": 40,
    "timeline_lead_days": 7,
    "timeline_padding_days": 14,
    "week_grouping_threshold_days": 60,
}
