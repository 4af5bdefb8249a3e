from __future__ import annotations

from typing import Dict, List, Optional

from gedex.loader.tokenizer import parse_xref
from gedex.logging import get_logger
from gedex.registry.entities import (
    DanglingReference,
    PendingReference,
    Record,
    RecordKey,
    Registry,
)

log = get_logger(__name__)

DEFAULT_RELATIONSHIP_TAGS: Dict[str, str] = {"father": "FATH", "mother": "MOTH"}

_ROLES = ("father", "mother")


def _is_ancestor(registry: Registry, candidate: RecordKey, start: Record) -> bool:
    """True if ``candidate`` is ``start`` or reachable through its parents."""
    seen = set()
    pending = [start.key]
    while pending:
        key = pending.pop()
        if key == candidate:
            return True
        if key in seen:
            continue
        seen.add(key)
        rec = registry.records.get(key)
        if rec is None:
            continue
        for parent in (rec.father, rec.mother):
            if parent is not None:
                pending.append(parent)
    return False


def _dangling(ref: PendingReference, reason: str) -> DanglingReference:
    return DanglingReference(
        source_id=ref.source_id, role=ref.role, target=ref.target,
        reason=reason, lineno=ref.lineno, source_code=ref.source_code,
    )


def collect_references(
    record: Record,
    relationship_tags: Optional[Dict[str, str]] = None,
) -> tuple[List[PendingReference], List[DanglingReference]]:
    """
    Read the relationship tags of a record.

    Returns (references, problems): well-formed references to resolve and
    malformed or repeated ones reported as dangling.
    """
    tags = relationship_tags or DEFAULT_RELATIONSHIP_TAGS
    refs: List[PendingReference] = []
    problems: List[DanglingReference] = []

    for role, tag_name in tags.items():
        if role not in _ROLES:
            continue
        for i, tag in enumerate(record.find_tags(tag_name)):
            if i > 0:
                problems.append(DanglingReference(
                    source_id=record.ident, role=role, target=tag.content,
                    reason="duplicate", lineno=tag.lineno, source_code=record.rtype,
                ))
                continue
            parsed = parse_xref(tag.content)
            if parsed is None:
                problems.append(DanglingReference(
                    source_id=record.ident, role=role, target=tag.content,
                    reason="malformed", lineno=tag.lineno, source_code=record.rtype,
                ))
                continue
            code, target_id = parsed
            refs.append(PendingReference(
                source_code=record.rtype,
                source_id=record.ident,
                role=role,
                code=code,
                target_id=target_id,
                target=tag.content.strip(),
                lineno=tag.lineno,
            ))

    return refs, problems


def try_link(registry: Registry, ref: PendingReference) -> Optional[str]:
    """
    Link one reference if its target is present.

    Returns None when linked, otherwise the reason it could not be.
    """
    child = registry.records.get(ref.source_key)
    parent = registry.records.get(ref.target_key)
    if child is None or parent is None:
        return "missing"
    # FATH @F1@ names a family, not a person
    if parent.kind != child.kind:
        return "type mismatch"
    if _is_ancestor(registry, child.key, parent):
        return "cycle"

    setattr(child, ref.role, parent.key)
    if child.key not in parent.children:
        parent.children.append(child.key)
    return None


def link_record(
    registry: Registry,
    record: Record,
    relationship_tags: Optional[Dict[str, str]] = None,
) -> None:
    """
    Resolve a freshly inserted record's father/mother references.

    Targets not yet in the registry are queued on ``registry.pending`` for
    ``resolve_pending``.
    """
    refs, problems = collect_references(record, relationship_tags)
    registry.diagnostics.dangling.extend(problems)

    for ref in refs:
        reason = try_link(registry, ref)
        if reason == "missing":
            registry.pending.append(ref)
        elif reason is not None:
            registry.diagnostics.dangling.append(_dangling(ref, reason))


def resolve_pending(registry: Registry) -> List[DanglingReference]:
    """
    Second pass over the queued forward references only.

    Unresolvable ones are reported in ``registry.diagnostics.dangling``
    and returned; the affected fields stay empty.
    """
    pending, registry.pending = registry.pending, []
    dangling: List[DanglingReference] = []

    for ref in pending:
        reason = try_link(registry, ref)
        if reason is None:
            continue
        dangling.append(_dangling(ref, reason))

    if dangling:
        log.info("%d cross-reference(s) left dangling", len(dangling))
    registry.diagnostics.dangling.extend(dangling)
    return dangling
