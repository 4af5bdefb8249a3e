
from __future__ import annotations

import typer
from rich.console import Console

from gedex.cli.commands.check import check_command
from gedex.cli.commands.export import export_command
from gedex.cli.commands.stats import stats_command

app = typer.Typer(
    name="gedex",
    help="GEDCOM line parser, checker, and exporter",
    add_completion=False,
)

console = Console()

app.command("check")(check_command)
app.command("export")(export_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
