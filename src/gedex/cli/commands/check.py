from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedex.core.exceptions import ParseError
from gedex.parser_core import GedexParser

console = Console()


def check_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
):
    """
    List lines matching neither GEDCOM grammar. Exits 1 if any are found.
    """
    try:
        unparsed = list(GedexParser().iter_unparsed(gedcom))
    except ParseError as exc:
        console.print(f"[red][ERROR][/red] {exc}")
        raise typer.Exit(code=2) from exc

    if not unparsed:
        console.print("[green]All lines recognized.[/green]")
        return

    table = Table(title=f"Unparsed lines ({len(unparsed)})")
    table.add_column("Line", justify="right")
    table.add_column("Content")
    for line in unparsed:
        table.add_row(str(line.lineno), line.raw)

    console.print(table)
    raise typer.Exit(code=1)
