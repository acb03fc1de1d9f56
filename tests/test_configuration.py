import pytest
import yaml

from hourline.configuration import DEFAULT_CONFIGURATION
from hourline.repository.configuration import ConfigurationRepository


def test_missing_file_gives_defaults(tmp_path):
    repo = ConfigurationRepository(tmp_path / "config.yaml")

    assert repo.get_config() == DEFAULT_CONFIGURATION


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("default_granularity: month\nrow_unit: 24\nunknown: 1\n")

    config = ConfigurationRepository(path).get_config()

    assert config["default_granularity"] == "month"
    assert config["row_unit"] == 24
    assert config["min_bar_height"] == DEFAULT_CONFIGURATION["min_bar_height"]
    assert "unknown" not in config


def test_invalid_granularity_in_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("default_granularity: fortnight\n")

    with pytest.raises(ValueError):
        ConfigurationRepository(path).get_config()


def test_non_mapping_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- week\n")

    with pytest.raises(ValueError):
        ConfigurationRepository(path).get_config()


def test_get_config_returns_a_copy(tmp_path):
    repo = ConfigurationRepository(tmp_path / "config.yaml")

    repo.get_config()["row_unit"] = 1

    assert repo.get_config()["row_unit"] == DEFAULT_CONFIGURATION["row_unit"]


def test_update_and_flush(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    repo = ConfigurationRepository(path)

    assert repo.flush() is False

    repo.update_config(default_granularity="day", timeline_padding_days=21)

    assert repo.flush() is True
    assert repo.flush() is False
    saved = yaml.safe_load(path.read_text())
    assert saved["default_granularity"] == "day"
    assert saved["timeline_padding_days"] == 21
    assert ConfigurationRepository(path).get_config()["timeline_padding_days"] == 21


def test_update_rejects_unknown_granularity(tmp_path):
    repo = ConfigurationRepository(tmp_path / "config.yaml")

    with pytest.raises(ValueError):
        repo.update_config(default_granularity="fortnight")  # type: ignore[arg-type]
