# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from hourline import configuration
from hourline.model.granularity_type import GRANULARITIES, GranularityType


class ConfigurationRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else configuration.APP_CONFIG_PATH

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        raw_config: Optional[dict[str, Any]] = None
        if self.path.is_file():
            raw_config = load(self.path.read_text(), Loader=Loader)

        loaded = deepcopy(configuration.DEFAULT_CONFIGURATION)
        if raw_config is not None:
            if not isinstance(raw_config, dict):
                raise ValueError(f"Configuration file {self.path} is not a mapping")
            # Unknown keys are ignored, missing keys keep their defaults
            for key in configuration.DEFAULT_CONFIGURATION:
                if key in raw_config and raw_config[key] is not None:
                    cast(dict[str, Any], loaded)[key] = raw_config[key]

        if loaded["default_granularity"] not in GRANULARITIES:
            raise ValueError(
                f"Invalid default_granularity: {loaded['default_granularity']}"
            )
        self._config = loaded

    def __save_data(self, config: configuration.Configuration) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        default_granularity: Optional[GranularityType] = None,
        row_unit: Optional[int] = None,
        min_bar_height: Optional[int] = None,
        row_margin: Optional[int] = None,
        chart_padding: Optional[int] = None,
        timeline_lead_days: Optional[int] = None,
        timeline_padding_days: Optional[int] = None,
        week_grouping_threshold_days: Optional[int] = None,
    ) -> None:
        self.is_dirty = True

        if default_granularity is not None:
            if default_granularity not in GRANULARITIES:
                raise ValueError(f"Invalid default_granularity: {default_granularity}")
            self.config["default_granularity"] = default_granularity
        if row_unit is not None:
            self.config["row_unit"] = row_unit
        if min_bar_height is not None:
            self.config["min_bar_height"] = min_bar_height
        if row_margin is not None:
            self.config["row_margin"] = row_margin
        if chart_padding is not None:
            self.config["chart_padding"] = chart_padding
        if timeline_lead_days is not None:
            self.config["timeline_lead_days"] = timeline_lead_days
        if timeline_padding_days is not None:
            self.config["timeline_padding_days"] = timeline_padding_days
        if week_grouping_threshold_days is not None:
            self.config["week_grouping_threshold_days"] = week_grouping_threshold_days


CONFIGURATION_REPO = ConfigurationRepository()
