from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedex.cli.utils import load_registry
from gedex.registry.entities import RecordKind

console = Console()


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    registry = load_registry(gedcom, verbose=verbose)

    table = Table(title="GEDCOM Statistics")
    table.add_column("Entity", style="bold")
    table.add_column("Count", justify="right")

    for kind in RecordKind:
        count = len(registry.by_kind(kind))
        if count:
            table.add_row(kind.value.capitalize(), str(count))

    table.add_row("Records", str(len(registry)))
    table.add_row("Unparsed lines", str(registry.diagnostics.unparsed_count))
    table.add_row("Dangling references", str(len(registry.diagnostics.dangling)))

    console.print(table)
