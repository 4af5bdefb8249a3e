from __future__ import annotations

from typing import Any, Optional


class GedexError(Exception):
    """Base exception for gedex failures."""


class ParseError(GedexError):
    """Raised when a document cannot be parsed. No partial registry survives."""


class ParseIOError(ParseError):
    """Raised when the underlying byte source cannot be opened or read."""


class EncodingError(ParseError):
    """Raised on a byte-order-mark other than UTF-8, or a text handle that cannot be decoded."""

    def __init__(self, message: str, bom: Any = None):
        super().__init__(message)
        self.bom = bom


class StructureError(ParseError):
    """Raised on an invalid level transition, bad header or duplicate record."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        self.reason = message
        if lineno:
            message = f"Line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno
