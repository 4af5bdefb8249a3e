"""
CLI package for gedex.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedex.cli.app import app, main

__all__ = [
    "app",
    "main",
]
