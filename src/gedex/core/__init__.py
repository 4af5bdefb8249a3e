from __future__ import annotations

from .exceptions import (
    EncodingError,
    GedexError,
    ParseError,
    ParseIOError,
    StructureError,
)

__all__ = [
    "EncodingError",
    "GedexError",
    "ParseError",
    "ParseIOError",
    "StructureError",
]
