# src/gedex/loader/reader.py

from __future__ import annotations

import enum
from pathlib import Path
from typing import IO, List, Tuple, Union

from gedex.core.exceptions import EncodingError, ParseIOError
from gedex.logging import get_logger

log = get_logger(__name__)

Source = Union[str, Path, bytes, bytearray, IO]


class Bom(enum.Enum):
    """Byte-order-marks that may lead a file, with their byte signatures."""

    NULL = b""
    UTF8 = b"\xef\xbb\xbf"
    UTF16_BE = b"\xfe\xff"
    UTF16_LE = b"\xff\xfe"
    UTF32_BE = b"\x00\x00\xfe\xff"
    UTF32_LE = b"\xff\xfe\x00\x00"
    UTF7 = b"\x2b\x2f\x76"
    UTF1 = b"\xf7\x64\x4c"
    UTF_EBCDIC = b"\xdd\x73\x66\x73"
    SCSU = b"\x0e\xfe\xff"
    BOCU1 = b"\xfb\xee\x28"
    GB18030 = b"\x84\x31\x95\x33"


# Longest signatures first: UTF-32 LE shares its prefix with UTF-16 LE.
_SIGNATURES = sorted(
    (bom for bom in Bom if bom is not Bom.NULL),
    key=lambda bom: len(bom.value),
    reverse=True,
)


def detect_bom(data: bytes) -> Bom:
    """Return the byte-order-mark at the start of ``data`` (``Bom.NULL`` if none)."""
    for bom in _SIGNATURES:
        if data.startswith(bom.value):
            return bom
    return Bom.NULL


def split_lines(text: str) -> List[str]:
    """
    Split on CRLF, CR or LF.

    Unlike ``str.splitlines`` this does not break on form feeds or unicode
    separators, which may legitimately appear inside free-text content.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _read_source(source: Source) -> Union[bytes, str]:
    """Read the whole source once, sequentially."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            with path.open("rb") as f:
                return f.read()
        except OSError as exc:
            raise ParseIOError(f"Cannot read GEDCOM file {path}: {exc}") from exc

    read = getattr(source, "read", None)
    if read is None:
        raise TypeError(f"Unsupported GEDCOM source: {type(source).__name__}")

    try:
        return read()
    except OSError as exc:
        raise ParseIOError(f"Cannot read GEDCOM stream: {exc}") from exc
    except UnicodeDecodeError as exc:
        # text handles decode while reading
        raise EncodingError(f"Cannot decode GEDCOM stream: {exc}") from exc


def read_lines(source: Source) -> Tuple[Bom, List[str]]:
    """
    Read ``source``, strip a UTF-8 byte-order-mark and split it into lines.

    Args:
        source: A path, a bytes buffer, or a binary (or text) file object.

    Returns:
        (bom, lines) where ``bom`` is the mark found at the start of input.

    Raises:
        ParseIOError: if the source cannot be opened or read.
        EncodingError: if a byte-order-mark other than UTF-8 is present, or
            a text handle fails to decode.
    """
    payload = _read_source(source)

    if isinstance(payload, str):
        # Text handles have already been decoded by the caller.
        if payload.startswith("\ufeff"):
            return Bom.UTF8, split_lines(payload[1:])
        return Bom.NULL, split_lines(payload)

    bom = detect_bom(payload)
    if bom not in (Bom.NULL, Bom.UTF8):
        log.error("Unsupported byte-order-mark detected: %s", bom.name)
        raise EncodingError(
            f"Unsupported byte-order-mark {bom.name}; only UTF-8 input is supported",
            bom=bom,
        )

    text = payload[len(bom.value):].decode("utf-8", errors="replace")
    lines = split_lines(text)
    log.debug("Read %d lines (bom=%s)", len(lines), bom.name)
    return bom, lines
