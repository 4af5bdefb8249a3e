"""
gedex: a GEDCOM-style line parser producing a cross-referenced record registry.

    from gedex import parse, count_unparsed

    registry = parse("family.ged")
    for record in registry:
        print(record.ident, record.name, registry.father_of(record))
"""

from __future__ import annotations

from gedex.parser_core import GedexParser, count_unparsed, iter_unparsed, parse
from gedex.core.exceptions import (
    EncodingError,
    GedexError,
    ParseError,
    ParseIOError,
    StructureError,
)
from gedex.registry.entities import DanglingReference, Record, RecordKind, Registry

__version__ = "0.1.0"

__all__ = [
    "DanglingReference",
    "EncodingError",
    "GedexError",
    "GedexParser",
    "ParseError",
    "ParseIOError",
    "Record",
    "RecordKind",
    "Registry",
    "StructureError",
    "count_unparsed",
    "iter_unparsed",
    "parse",
]
