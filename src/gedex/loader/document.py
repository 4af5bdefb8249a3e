# src/gedex/loader/document.py

from __future__ import annotations

import enum
from typing import Dict, Iterable, Optional

from gedex.core.exceptions import StructureError
from gedex.loader.folder import TagFolder
from gedex.loader.tokenizer import DataLine, GedLine, RefLine, Unrecognized
from gedex.logging import get_logger
from gedex.registry.build_record import build_record, tag_for_line
from gedex.registry.entities import Registry
from gedex.registry.link_entities import link_record

log = get_logger(__name__)


class DocumentState(enum.Enum):
    INITIAL = "initial"        # no header consumed yet
    REFERENCE = "reference"    # awaiting a new top-level reference block
    RECORD_TAG = "record_tag"  # inside a block, accumulating via the folder
    INVALID = "invalid"        # terminal failure


class GedEx:
    """
    Document-level state machine.

    Consumes typed lines in file order. Each level-0 line closes the open
    block (header, reference block or other data block) and opens the next;
    deeper lines are folded into the open block. Closed reference blocks
    become records in ``registry``.

    Once INVALID, every further line is discarded and ``fold`` raises.
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        *,
        header_tag: str = "HEAD",
        strict: bool = False,
        relationship_tags: Optional[Dict[str, str]] = None,
    ):
        self.registry = registry if registry is not None else Registry()
        self.header_tag = header_tag
        self.strict = strict
        self.relationship_tags = relationship_tags

        self.state = DocumentState.INITIAL
        self.error: Optional[StructureError] = None
        self.closed_blocks = 0

        self._folder: Optional[TagFolder] = None
        self._block_line: Optional[DataLine | RefLine] = None

    # ------------------------------------------------------------------ #
    # Status
    # ------------------------------------------------------------------ #

    @property
    def can_advance(self) -> bool:
        return self.state is not DocumentState.INVALID

    @property
    def successful(self) -> bool:
        return self.state is DocumentState.RECORD_TAG and self.closed_blocks > 0

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def _invalidate(self, error: StructureError) -> DocumentState:
        log.error("Document rejected: %s", error)
        self.error = error
        self.state = DocumentState.INVALID
        self._folder = None
        self._block_line = None
        return self.state

    def _open_block(self, line: DataLine | RefLine) -> None:
        self._folder = TagFolder()
        self._folder.push(0, tag_for_line(line))
        self._block_line = line

    def _close_block(self) -> None:
        if self._folder is None or self._block_line is None:
            return

        block = self._folder.finish()
        line = self._block_line
        self._folder = None
        self._block_line = None

        if isinstance(line, RefLine):
            record = build_record(line, block)
            self.registry.insert(record)
            link_record(self.registry, record, self.relationship_tags)
            log.debug("Closed record %s (%s) with %d tag(s)", record.xref, record.kind.value, len(record.tags))
        elif line.tag == self.header_tag and self.registry.header is None:
            self.registry.header = block
        else:
            self.registry.extra_blocks.append(block)

        self.closed_blocks += 1

    def _handle_initial(self, line: GedLine) -> DocumentState:
        if (
            isinstance(line, DataLine)
            and line.level == 0
            and line.tag == self.header_tag
            and line.content is None
        ):
            self._open_block(line)
            return DocumentState.RECORD_TAG

        raise StructureError(
            f"expected '0 {self.header_tag}' header as the first line",
            lineno=line.lineno,
        )

    def _handle_block_line(self, line: DataLine | RefLine) -> DocumentState:
        if line.level == 0:
            if isinstance(line, DataLine) and line.tag == self.header_tag:
                raise StructureError("duplicate document header", lineno=line.lineno)
            self._close_block()
            self._open_block(line)
            return DocumentState.RECORD_TAG if isinstance(line, RefLine) else DocumentState.REFERENCE

        if self._folder is None:
            raise StructureError(
                f"level {line.level} line outside of any block", lineno=line.lineno
            )
        self._folder.push(line.level, tag_for_line(line))
        return self.state

    def feed(self, line: GedLine) -> DocumentState:
        """Advance the machine by one typed line and return the new state."""
        if self.state is DocumentState.INVALID:
            return self.state

        try:
            if self.state is DocumentState.INITIAL:
                self.state = self._handle_initial(line)
            elif isinstance(line, Unrecognized):
                self.registry.diagnostics.unparsed.append(line)
                if self.strict:
                    raise StructureError(f"unrecognized line {line.raw!r}", lineno=line.lineno)
            else:
                self.state = self._handle_block_line(line)
        except StructureError as exc:
            return self._invalidate(exc)

        return self.state

    def feed_all(self, lines: Iterable[GedLine]) -> DocumentState:
        """Feed lines until exhausted or the machine can no longer advance."""
        for line in lines:
            self.feed(line)
            if not self.can_advance:
                break
        return self.state

    def fold(self) -> Registry:
        """
        Finalize the open block and hand back the registry.

        Raises:
            StructureError: in INITIAL or INVALID state, or if the last block
                cannot be finalized.
        """
        if self.state is DocumentState.INVALID:
            raise StructureError(
                f"not recognized document: {self.error.reason}",
                lineno=self.error.lineno,
            ) from self.error
        if self.state is DocumentState.INITIAL:
            raise StructureError("not recognized document: no header found")

        try:
            self._close_block()
        except StructureError as exc:
            self._invalidate(exc)
            raise

        return self.registry
