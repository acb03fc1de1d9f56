# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from hourline.repository.configuration import CONFIGURATION_REPO
from hourline.terminal.custom_typer import AliasedTyperGroup
from hourline.terminal.parse import parse_granularity

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    for key, value in config.items():
        table.add_row(key, str(value))
    table.add_row("config_path", str(CONFIGURATION_REPO.path))

    console.print(table)


@app.command("set, s")
def set_config(
    default_granularity: Annotated[
        Optional[str],
        typer.Option("--default-granularity", "-g", help="day, week, or month"),
    ] = None,
    row_unit: Annotated[
        Optional[int], typer.Option("--row-unit", min=1, help="Height of one child row")
    ] = None,
    min_bar_height: Annotated[
        Optional[int],
        typer.Option("--min-bar-height", min=1, help="Minimum height of a sprint band"),
    ] = None,
    row_margin: Annotated[
        Optional[int],
        typer.Option("--row-margin", min=0, help="Gap between sprint bands"),
    ] = None,
    chart_padding: Annotated[
        Optional[int],
        typer.Option("--chart-padding", min=0, help="Padding added to the chart height"),
    ] = None,
    timeline_lead_days: Annotated[
        Optional[int],
        typer.Option("--lead-days", min=0, help="Days shown before today on the timeline"),
    ] = None,
    timeline_padding_days: Annotated[
        Optional[int],
        typer.Option(
            "--padding-days", min=0, help="Days shown after the latest sprint end"
        ),
    ] = None,
    week_grouping_threshold_days: Annotated[
        Optional[int],
        typer.Option(
            "--week-threshold",
            min=0,
            help="Custom ranges longer than this many days are grouped by week",
        ),
    ] = None,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        default_granularity=parse_granularity(default_granularity),
        row_unit=row_unit,
        min_bar_height=min_bar_height,
        row_margin=row_margin,
        chart_padding=chart_padding,
        timeline_lead_days=timeline_lead_days,
        timeline_padding_days=timeline_padding_days,
        week_grouping_threshold_days=week_grouping_threshold_days,
    )
    CONFIGURATION_REPO.flush()

    console = Console()
    console.print("[green]Configuration updated[/green]")
