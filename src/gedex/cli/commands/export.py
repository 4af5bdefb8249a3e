from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedex.cli.utils import load_registry, write_json
from gedex.exporter import build_registry_dict

console = Console()


def export_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Export the parsed registry to JSON (stdout by default).
    """
    registry = load_registry(gedcom, verbose=verbose)

    if verbose:
        console.log("Exporting JSON")

    write_json(build_registry_dict(registry), out=out, pretty=pretty)

    if verbose:
        console.log("Export complete")
