from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from gedex.core.exceptions import StructureError
from gedex.loader.folder import Tag
from gedex.loader.tokenizer import Unrecognized, parse_xref


class RecordKind(str, enum.Enum):
    INDIVIDUAL = "individual"
    FAMILY = "family"
    SOURCE = "source"
    NOTE = "note"
    REPOSITORY = "repository"
    MEDIA = "media"
    SUBMITTER = "submitter"
    OTHER = "other"


# Record tag on the reference line (``0 @I1@ INDI``) -> kind
KIND_BY_TAG: Dict[str, RecordKind] = {
    "INDI": RecordKind.INDIVIDUAL,
    "FAM": RecordKind.FAMILY,
    "SOUR": RecordKind.SOURCE,
    "NOTE": RecordKind.NOTE,
    "REPO": RecordKind.REPOSITORY,
    "OBJE": RecordKind.MEDIA,
    "SUBM": RecordKind.SUBMITTER,
}

# Fallback when the reference line names no record tag: conventional code letters
KIND_BY_CODE: Dict[str, RecordKind] = {
    "I": RecordKind.INDIVIDUAL,
    "F": RecordKind.FAMILY,
    "S": RecordKind.SOURCE,
    "N": RecordKind.NOTE,
    "R": RecordKind.REPOSITORY,
    "O": RecordKind.MEDIA,
    "M": RecordKind.MEDIA,
    "U": RecordKind.SUBMITTER,
}


# (type code, number): @I1@ and @F1@ are distinct records
RecordKey = Tuple[str, int]


def resolve_kind(code: str, record_tag: Optional[str] = None) -> RecordKind:
    if record_tag:
        kind = KIND_BY_TAG.get(record_tag.strip().upper())
        if kind is not None:
            return kind
    return KIND_BY_CODE.get(code[:1].upper(), RecordKind.OTHER)


@dataclass(slots=True)
class Record:
    """
    A completed level-0 reference block.

    Father, mother and children are stored as registry keys only; the
    registry owns every record and resolves them on demand.
    """
    ident: int
    rtype: str
    kind: RecordKind = RecordKind.OTHER
    name: str = ""

    father: Optional[RecordKey] = None
    mother: Optional[RecordKey] = None
    children: List[RecordKey] = field(default_factory=list)

    # Folded nested tags of the block, in line order
    tags: List[Tag] = field(default_factory=list)
    lineno: int = 0

    @property
    def key(self) -> RecordKey:
        return (self.rtype, self.ident)

    @property
    def xref(self) -> str:
        return f"@{self.rtype}{self.ident}@"

    @property
    def father_id(self) -> Optional[int]:
        return self.father[1] if self.father is not None else None

    @property
    def mother_id(self) -> Optional[int]:
        return self.mother[1] if self.mother is not None else None

    def find_tags(self, name: str) -> List[Tag]:
        return [t for t in self.tags if t.name == name]

    def first_content(self, name: str) -> Optional[str]:
        for t in self.tags:
            if t.name == name:
                return t.content
        return None


def xref_of(key: RecordKey) -> str:
    return f"@{key[0]}{key[1]}@"


@dataclass(slots=True)
class DanglingReference:
    """A father/mother reference that could not be linked."""
    source_id: int
    role: str
    target: Optional[str]
    reason: str
    lineno: int = 0
    source_code: str = ""

    @property
    def source_xref(self) -> str:
        return f"@{self.source_code}{self.source_id}@" if self.source_code else str(self.source_id)

    def __str__(self) -> str:
        return (
            f"Line {self.lineno}: {self.role} reference {self.target!r} "
            f"of record {self.source_xref} is {self.reason}"
        )


@dataclass(slots=True)
class PendingReference:
    """A relationship waiting for its target record to be inserted."""
    source_code: str
    source_id: int
    role: str
    code: str
    target_id: int
    target: str
    lineno: int = 0

    @property
    def source_key(self) -> RecordKey:
        return (self.source_code, self.source_id)

    @property
    def target_key(self) -> RecordKey:
        return (self.code, self.target_id)


@dataclass
class Diagnostics:
    unparsed: List[Unrecognized] = field(default_factory=list)
    dangling: List[DanglingReference] = field(default_factory=list)

    @property
    def unparsed_count(self) -> int:
        return len(self.unparsed)

    def __bool__(self) -> bool:
        return bool(self.unparsed or self.dangling)


@dataclass
class Registry:
    """
    In-memory record store keyed by (type code, number).

    ``@I1@`` and ``@F1@`` are separate records. ``get(1)`` without a code
    returns the first record inserted with that number.

    The only long-lived owner of records. Built empty at the start of a
    parse and returned to the caller on success.
    """
    records: Dict[RecordKey, Record] = field(default_factory=dict)
    header: Optional[Tag] = None
    extra_blocks: List[Tag] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    pending: List[PendingReference] = field(default_factory=list, repr=False)
    _by_ident: Dict[int, List[RecordKey]] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records.values())

    def __contains__(self, item: object) -> bool:
        # a bare number matches any type code
        if isinstance(item, tuple):
            return item in self.records
        return item in self._by_ident

    def insert(self, record: Record) -> None:
        key = record.key
        if key in self.records:
            existing = self.records[key]
            raise StructureError(
                f"duplicate identifier {record.xref} "
                f"(already defined on line {existing.lineno})",
                lineno=record.lineno,
            )
        self.records[key] = record
        self._by_ident.setdefault(record.ident, []).append(key)

    def get(self, ident: Optional[int], code: Optional[str] = None) -> Optional[Record]:
        if ident is None:
            return None
        if code is not None:
            return self.records.get((code, ident))
        keys = self._by_ident.get(ident)
        return self.records[keys[0]] if keys else None

    def lookup(self, key: Optional[Union[RecordKey, str]]) -> Optional[Record]:
        """Find a record by key tuple or by ``@I1@`` style xref."""
        if key is None:
            return None
        if isinstance(key, str):
            parsed = parse_xref(key)
            if parsed is None:
                return None
            key = parsed
        return self.records.get(key)

    def father_of(self, record: Record) -> Optional[Record]:
        return self.lookup(record.father)

    def mother_of(self, record: Record) -> Optional[Record]:
        return self.lookup(record.mother)

    def children_of(self, record: Record) -> List[Record]:
        return [self.records[c] for c in record.children if c in self.records]

    def by_kind(self, kind: RecordKind) -> List[Record]:
        return [r for r in self.records.values() if r.kind == kind]
