# src/gedex/loader/__init__.py

"""
Public interface for the gedex loader stack.

    bytes -> read_lines -> tokenize_lines -> GedEx (folding via TagFolder)

Intended usage from other parts of the project and tests:

    from gedex.loader import (
        Bom,
        DataLine,
        RefLine,
        Unrecognized,
        Tag,
        TagFolder,
        GedEx,
        DocumentState,
        read_lines,
        tokenize_line,
        tokenize_lines,
    )
"""

from __future__ import annotations

from .reader import Bom, detect_bom, read_lines, split_lines
from .tokenizer import (
    DataLine,
    GedLine,
    RefLine,
    Unrecognized,
    parse_xref,
    tokenize_line,
    tokenize_lines,
)
from .folder import Tag, TagFolder
from .document import DocumentState, GedEx


__all__ = [
    "Bom",
    "DataLine",
    "DocumentState",
    "GedEx",
    "GedLine",
    "RefLine",
    "Tag",
    "TagFolder",
    "Unrecognized",
    "detect_bom",
    "parse_xref",
    "read_lines",
    "split_lines",
    "tokenize_line",
    "tokenize_lines",
]
