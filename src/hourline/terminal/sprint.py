# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from hourline import time
from hourline.color import UNSCHEDULED_COLOR, status_color
from hourline.model.layout_node import LayoutNode
from hourline.model.period import PeriodStatus
from hourline.repository.configuration import CONFIGURATION_REPO
from hourline.repository.dataset import load_dataset
from hourline.service.gantt import layout, total_height
from hourline.service.period import period_progress, sort_periods
from hourline.service.timeline import default_timeline_range, today_position
from hourline.terminal.parse import parse_date

DatasetArgument = Annotated[
    Path,
    typer.Argument(exists=True, dir_okay=False, help="YAML dataset file"),
]

TodayOption = Annotated[
    Optional[pendulum.Date],
    typer.Option(
        "--today",
        "-t",
        parser=parse_date,
        help="Reference day for statuses (YYYY-MM-DD, today, yesterday, tomorrow, or day offset)",
    ),
]


def sprints(file: DatasetArgument, today: TodayOption = None) -> None:
    """List sprints with active first, then upcoming, then completed."""
    console = Console()
    reference = today if today is not None else time.today_local()

    try:
        dataset = load_dataset(file)
        ordered = sort_periods(dataset["periods"], reference)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if len(ordered) == 0:
        console.print("\n[dim]No sprints to display[/dim]\n")
        return

    table = Table()
    table.add_column("Sprint", style="cyan")
    table.add_column("Status")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Progress", justify="right")
    table.add_column("Groups", justify="right")

    for classified in ordered:
        period = classified["period"]
        progress = period_progress(period, reference)
        table.add_row(
            period.get("name") or period.get("id") or "[no name]",
            _status_text(
                classified["status"],
                period.get("start") is None or period.get("end") is None,
            ),
            period.get("start") or "-",
            period.get("end") or "-",
            (
                f"{progress['days_completed']}/{progress['total_days']} days"
                if progress is not None
                else "-"
            ),
            str(len(period.get("children") or [])),
        )

    console.print(table)


def gantt(
    file: DatasetArgument,
    today: TodayOption = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help="First day of the timeline"),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--end", "-e", parser=parse_date, help="Last day of the timeline"),
    ] = None,
) -> None:
    """Show the sprint timeline layout as left/width percentages."""
    console = Console()
    config = CONFIGURATION_REPO.get_config()
    reference = today if today is not None else time.today_local()

    try:
        dataset = load_dataset(file)
        default_start, default_end = default_timeline_range(
            dataset["periods"],
            reference,
            config["timeline_lead_days"],
            config["timeline_padding_days"],
        )
        range_start = start if start is not None else default_start
        range_end = end if end is not None else default_end
        nodes = layout(
            sort_periods(dataset["periods"], reference),
            range_start,
            range_end,
            row_unit=config["row_unit"],
            min_bar_height=config["min_bar_height"],
            row_margin=config["row_margin"],
            today=reference,
        )
        today_percent = today_position(reference, range_start, range_end)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    header = (
        f"\n[bold]{time.date_to_display_long_str(range_start)} to "
        f"{time.date_to_display_long_str(range_end)}[/bold]"
    )
    if today_percent is not None:
        header += f" (today at {today_percent:.1f}%)"
    console.print(header + "\n")

    if len(nodes) == 0:
        console.print("[dim]No scheduled sprints to display[/dim]\n")
        return

    table = Table()
    table.add_column("Sprint", style="cyan")
    table.add_column("Status")
    table.add_column("Left %", justify="right")
    table.add_column("Width %", justify="right")
    table.add_column("Top", justify="right")
    table.add_column("Height", justify="right")

    for node in nodes:
        _add_node_rows(table, node, 0)

    console.print(table)
    console.print(
        f"Chart height {total_height(nodes, config['row_margin'], config['chart_padding']):.0f}"
    )
    console.print()


def _add_node_rows(table: Table, node: LayoutNode, depth: int) -> None:
    name = node["name"] or node["id"] or "[no name]"
    prefix = "  " * (depth - 1) + "└ " if depth > 0 else ""
    table.add_row(
        prefix + name,
        Text(node["status"], style=node["color"]),
        f"{node['left_percent']:.1f}",
        f"{node['width_percent']:.1f}",
        f"{node['top']:.0f}",
        f"{node['height']:.0f}",
    )
    for child in node["children"]:
        _add_node_rows(table, child, depth + 1)


def _status_text(status: PeriodStatus, unscheduled: bool) -> Text:
    if unscheduled:
        return Text("not scheduled", style=UNSCHEDULED_COLOR)
    return Text(status, style=status_color(status))
