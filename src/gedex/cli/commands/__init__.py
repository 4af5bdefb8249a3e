"""
CLI command modules for gedex.

Each command module defines a single Typer-compatible command function.
"""

from gedex.cli.commands.check import check_command
from gedex.cli.commands.export import export_command
from gedex.cli.commands.stats import stats_command

__all__ = [
    "check_command",
    "export_command",
    "stats_command",
]
