# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from hourline import time
from hourline.color import TREND_COLORS
from hourline.model.bucket import Bucket, DimensionType
from hourline.model.summary import Summary
from hourline.repository.configuration import CONFIGURATION_REPO
from hourline.repository.dataset import load_dataset
from hourline.service.aggregate import aggregate_range
from hourline.service.breakdown import bucket_breakdown, rank_items
from hourline.service.date_range import preset_range, suggest_granularity
from hourline.service.label import label_breakdown, names_by_id
from hourline.terminal.parse import (
    parse_date,
    parse_dimensions,
    parse_granularity,
    parse_range_preset,
)


def hours(
    file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="YAML dataset file"),
    ],
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start",
            "-s",
            parser=parse_date,
            help="First day of the range (YYYY-MM-DD, today, yesterday, tomorrow, or day offset like -30)",
        ),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--end",
            "-e",
            parser=parse_date,
            help="Last day of the range (YYYY-MM-DD, today, yesterday, tomorrow, or day offset like -1)",
        ),
    ] = None,
    preset: Annotated[
        Optional[str],
        typer.Option(
            "--range",
            "-r",
            help="Preset range ending today: week, month, quarter, or year",
        ),
    ] = None,
    granularity: Annotated[
        Optional[str],
        typer.Option("--granularity", "-g", help="Time granularity: day, week, or month"),
    ] = None,
    by: Annotated[
        Optional[list[str]],
        typer.Option("--by", "-b", help="Breakdown dimension: user, task, or project"),
    ] = None,
    planning: Annotated[
        bool,
        typer.Option("--planning", "-p", help="Aggregate planning hours instead of hours spent"),
    ] = False,
) -> None:
    """Show logged hours grouped into day, week, or month buckets."""
    console = Console()
    config = CONFIGURATION_REPO.get_config()

    range_preset = parse_range_preset(preset)
    selected_granularity = parse_granularity(granularity)
    dimensions = parse_dimensions(by)

    if range_preset is not None:
        if start is not None or end is not None:
            raise typer.BadParameter("--range can not be combined with --start or --end")
        range_start, range_end = preset_range(range_preset, time.today_local())
    else:
        range_end = end if end is not None else time.today_local()
        range_start = start if start is not None else range_end.subtract(days=30)
        if range_start > range_end:
            raise typer.BadParameter("Start date must not be after end date")

    if selected_granularity is None:
        if range_preset is not None:
            selected_granularity = suggest_granularity(range_preset)
        elif start is not None and end is not None:
            selected_granularity = suggest_granularity(
                "custom",
                range_start,
                range_end,
                config["week_grouping_threshold_days"],
            )
        else:
            selected_granularity = config["default_granularity"]

    try:
        dataset = load_dataset(file)
        aggregation = aggregate_range(
            dataset["entries"],
            range_start,
            range_end,
            selected_granularity,
            dimensions,
            planning=planning,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    names = {
        "user": names_by_id(dataset["users"]),
        "task": names_by_id(dataset["tasks"]),
        "project": names_by_id(dataset["projects"]),
    }

    console.print(
        f"\n[bold]{time.date_to_display_long_str(range_start)} to "
        f"{time.date_to_display_long_str(range_end)}[/bold]"
        f" (granularity: {selected_granularity})\n"
    )

    if aggregation["summary"]["entry_count"] == 0:
        console.print("[dim]No hours logged in this range[/dim]\n")

    table = Table()
    table.add_column("Period", style="cyan")
    table.add_column("Hours", justify="right", style="magenta")
    table.add_column("Entries", justify="right")
    for dimension in dimensions:
        table.add_column(f"By {dimension}")

    for bucket in aggregation["buckets"]:
        table.add_row(
            bucket["label"],
            f"{bucket['total_hours']:.2f}",
            str(bucket["entry_count"]),
            *[
                _format_breakdown(bucket, dimension, names[dimension])
                for dimension in dimensions
            ],
        )

    console.print(table)
    _print_summary(console, aggregation["summary"])


def _format_breakdown(
    bucket: Bucket, dimension: DimensionType, names: dict[str, str]
) -> str:
    ranked = rank_items(bucket_breakdown(bucket, dimension).values())
    return ", ".join(
        f"{item['label']} {item['total_hours']:.2f}"
        for item in label_breakdown(ranked, names)
    )


def _print_summary(console: Console, summary: Summary) -> None:
    trend_color = TREND_COLORS[summary["trend"]]
    trend = (
        "stable"
        if summary["trend"] == "stable"
        else f"{summary['trend']} {abs(summary['trend_percent']):.0f}%"
    )

    console.print(
        f"Total [bold]{summary['total_hours']:.2f}[/bold]"
        f"  Average {summary['average_per_bucket']:.2f}"
        f"  Max {summary['max_hours']:.2f}"
        f"  Min {summary['min_hours']:.2f}"
        f"  Trend [{trend_color}]{trend}[/{trend_color}]"
        f"  Users {summary['unique_users']}"
        f"  Tasks {summary['unique_tasks']}"
    )
    console.print()
