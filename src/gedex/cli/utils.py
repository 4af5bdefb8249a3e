
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict

import typer
from rich.console import Console

from gedex.core.exceptions import ParseError
from gedex.parser_core import GedexParser
from gedex.registry.entities import Registry

console = Console()
err_console = Console(stderr=True)

PARSE_ERROR_EXIT = 2


def load_registry(path: Path, *, verbose: bool = False) -> Registry:
    """
    Parse a GEDCOM file, turning ParseError into a red message and exit code 2.
    """
    t0 = time.perf_counter()

    try:
        registry = GedexParser().parse(path)
    except ParseError as exc:
        err_console.print(f"[red][ERROR][/red] {exc}")
        raise typer.Exit(code=PARSE_ERROR_EXIT) from exc

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded {path} in {elapsed:.2f}s")

    return registry


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
