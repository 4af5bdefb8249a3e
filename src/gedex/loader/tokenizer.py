# src/gedex/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

MAX_IDENT = 2 ** 64 - 1

# Both grammars are anchored to the whole line. Levels and identifiers are
# ASCII digits only.
DATA_LINE_RE = re.compile(r"^(\d{1,2})\s+(_?[A-Z]{3,5})(?:\s+(.*))?$", re.ASCII)
REF_LINE_RE = re.compile(r"^(\d{1,2})\s+@([A-Z]+)(\d+)@(?:\s+(.*))?$", re.ASCII)
XREF_RE = re.compile(r"^@([A-Z]+)(\d+)@$", re.ASCII)


@dataclass(frozen=True)
class DataLine:
    """
    A line carrying a tag and optional free-text content.

    Attributes:
        lineno: 1-based line number in the original input.
        level: Nesting level (0-99).
        tag: Uppercase tag, optionally prefixed with ``_`` for custom tags.
        content: Verbatim content after the tag, or None.
    """
    lineno: int
    level: int
    tag: str
    content: Optional[str] = None


@dataclass(frozen=True)
class RefLine:
    """
    A line naming an addressable entity, e.g. ``0 @I12@ INDI``.

    Attributes:
        lineno: 1-based line number in the original input.
        level: Nesting level (0-99).
        code: Entity-type code, the letters inside the ``@...@`` token.
        ident: Numeric identifier inside the ``@...@`` token.
        content: Verbatim content after the token (usually the record tag).
    """
    lineno: int
    level: int
    code: str
    ident: int
    content: Optional[str] = None


@dataclass(frozen=True)
class Unrecognized:
    """A line matching neither grammar. Counted, never folded."""
    lineno: int
    raw: str


GedLine = Union[DataLine, RefLine, Unrecognized]


def _strip_eol(line: str) -> str:
    """Strip trailing CR/LF characters but preserve all other whitespace."""
    return line.rstrip("\r\n")


def _content(value: Optional[str]) -> Optional[str]:
    return value if value else None


def tokenize_line(line: str, lineno: int = 0) -> GedLine:
    """
    Classify a single raw line.

    The data grammar is tried first, then the reference grammar:

        "1 NAME John /Doe/"   -> DataLine(level=1, tag="NAME", content="John /Doe/")
        "0 @I1@ INDI"         -> RefLine(level=0, code="I", ident=1, content="INDI")
        "1 FAMC @F1@"         -> DataLine(level=1, tag="FAMC", content="@F1@")
        "garbage"             -> Unrecognized
    """
    raw = _strip_eol(line)

    match = DATA_LINE_RE.match(raw)
    if match:
        level, tag, content = match.groups()
        return DataLine(lineno=lineno, level=int(level), tag=tag, content=_content(content))

    match = REF_LINE_RE.match(raw)
    if match:
        level, code, ident, content = match.groups()
        ident_value = int(ident)
        if ident_value > MAX_IDENT:
            return Unrecognized(lineno=lineno, raw=raw)
        return RefLine(
            lineno=lineno,
            level=int(level),
            code=code,
            ident=ident_value,
            content=_content(content),
        )

    return Unrecognized(lineno=lineno, raw=raw)


def tokenize_lines(lines: Iterable[str]) -> Iterator[GedLine]:
    """
    Yield one typed line per input line, numbered from 1.

    Blank (whitespace-only) lines are skipped; they carry no structure and
    are not reported as unparsed.
    """
    for lineno, raw_line in enumerate(lines, start=1):
        stripped = _strip_eol(raw_line)
        if not stripped.strip():
            continue
        yield tokenize_line(stripped, lineno=lineno)


def parse_xref(text: Optional[str]) -> Optional[Tuple[str, int]]:
    """
    Parse cross-reference content such as ``@I12@`` into ``("I", 12)``.

    Returns None when the text is not a single well-formed reference.
    """
    if not text:
        return None
    match = XREF_RE.match(text.strip())
    if not match:
        return None
    ident = int(match.group(2))
    if ident > MAX_IDENT:
        return None
    return match.group(1), ident
