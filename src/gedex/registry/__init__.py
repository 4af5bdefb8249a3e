from __future__ import annotations

from .build_record import build_record, tag_for_line
from .entities import (
    DanglingReference,
    Diagnostics,
    PendingReference,
    Record,
    RecordKey,
    RecordKind,
    Registry,
    resolve_kind,
    xref_of,
)
from .link_entities import collect_references, link_record, resolve_pending, try_link

__all__ = [
    "DanglingReference",
    "Diagnostics",
    "PendingReference",
    "Record",
    "RecordKey",
    "RecordKind",
    "Registry",
    "build_record",
    "collect_references",
    "link_record",
    "resolve_kind",
    "resolve_pending",
    "tag_for_line",
    "try_link",
    "xref_of",
]
