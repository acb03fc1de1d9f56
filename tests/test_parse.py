import pytest
import typer

from hourline.terminal.parse import parse_dimensions, parse_granularity, parse_range_preset


def test_parse_dimensions_defaults_to_user():
    assert parse_dimensions(None) == ["user"]
    assert parse_dimensions([]) == ["user"]


def test_parse_dimensions_splits_and_drops_duplicates():
    assert parse_dimensions(["user", "task, user", "project,task"]) == [
        "user",
        "task",
        "project",
    ]


def test_parse_dimensions_rejects_unknown():
    with pytest.raises(typer.BadParameter):
        parse_dimensions(["team"])


def test_parse_granularity_and_range_preset():
    assert parse_granularity("month") == "month"
    assert parse_range_preset("quarter") == "quarter"
    with pytest.raises(typer.BadParameter):
        parse_granularity("fortnight")
    with pytest.raises(typer.BadParameter):
        parse_range_preset("custom")
