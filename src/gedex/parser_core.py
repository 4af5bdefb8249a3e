"""
parser_core.py
Central parsing engine with full logging integration.
"""

from __future__ import annotations

from typing import Iterator, Optional

from gedex.loader.reader import Source, read_lines
from gedex.loader.tokenizer import Unrecognized, tokenize_lines
from gedex.loader.document import GedEx
from gedex.config import GPConfig, get_config
from gedex.core.exceptions import ParseError
from gedex.logging import get_logger
from gedex.registry.entities import Registry
from gedex.registry.link_entities import resolve_pending


class GedexParser:
    """
    High-level parser:
      - reads the source and checks its byte-order-mark
      - tokenizes every line
      - drives the document state machine, folding blocks into records
      - resolves deferred cross-references

    Holds no state between calls; each parse owns a fresh registry.
    """

    def __init__(self, config: Optional[GPConfig] = None):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger("parser_core")

    # ---------------------------------------------------------
    # Diagnostics pre-check
    # ---------------------------------------------------------
    def iter_unparsed(self, source: Source) -> Iterator[Unrecognized]:
        """Yield every line matching neither lexical grammar."""
        _, lines = read_lines(source)
        for line in tokenize_lines(lines):
            if isinstance(line, Unrecognized):
                yield line

    def count_unparsed(self, source: Source) -> int:
        """Count lines matching neither grammar, independent of structure."""
        count = sum(1 for _ in self.iter_unparsed(source))
        if count:
            self.log.warning("%d line(s) match neither GEDCOM grammar", count)
        return count

    # ---------------------------------------------------------
    # Full parse
    # ---------------------------------------------------------
    def parse(self, source: Source) -> Registry:
        """
        Full parse sequence.

        Returns: the populated Registry, with unparsed lines and dangling
        references in ``registry.diagnostics``.

        Raises: ParseIOError, EncodingError or StructureError.
        """
        try:
            bom, lines = read_lines(source)
        except ParseError:
            self.log.error("Reading GEDCOM input failed.")
            raise

        self.log.debug("Parsing %d line(s), bom=%s", len(lines), bom.name)

        machine = GedEx(
            Registry(),
            header_tag=self.cfg.header_tag,
            strict=self.cfg.strict,
            relationship_tags=self.cfg.relationship_tags,
        )
        machine.feed_all(tokenize_lines(lines))
        registry = machine.fold()

        resolve_pending(registry)

        diagnostics = registry.diagnostics
        if diagnostics.unparsed:
            self.log.warning("%d unparsed line(s) skipped", diagnostics.unparsed_count)
        self.log.info(
            "Parse completed: %d record(s), %d dangling reference(s).",
            len(registry),
            len(diagnostics.dangling),
        )
        return registry


def parse(source: Source, config: Optional[GPConfig] = None) -> Registry:
    return GedexParser(config=config).parse(source)


def count_unparsed(source: Source, config: Optional[GPConfig] = None) -> int:
    return GedexParser(config=config).count_unparsed(source)


def iter_unparsed(source: Source, config: Optional[GPConfig] = None) -> Iterator[Unrecognized]:
    return GedexParser(config=config).iter_unparsed(source)
