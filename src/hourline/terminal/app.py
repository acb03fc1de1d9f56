# SPDX-License-Identifier: MIT

import typer

from hourline.terminal import configuration
from hourline.terminal.custom_typer import AliasedTyperGroup
from hourline.terminal.hours import hours
from hourline.terminal.sprint import gantt, sprints

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="Hourline - Time-bucketed hour reports and sprint timelines",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.command(name="hours, h")(hours)
app.command(name="sprints, s")(sprints)
app.command(name="gantt, g")(gantt)


def run() -> None:
    app()
