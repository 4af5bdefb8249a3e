# tests/test_link_entities.py

from __future__ import annotations

from gedex.loader import Tag
from gedex.registry import Record, Registry, link_record, resolve_kind, resolve_pending


def person(ident: int, father: str | None = None, mother: str | None = None, code: str = "I") -> Record:
    tags = []
    if father is not None:
        tags.append(Tag("FATH", father, lineno=ident * 10 + 1))
    if mother is not None:
        tags.append(Tag("MOTH", mother, lineno=ident * 10 + 2))
    return Record(ident=ident, rtype=code, kind=resolve_kind(code), tags=tags, lineno=ident * 10)


def insert_all(reg: Registry, *records: Record) -> None:
    for rec in records:
        reg.insert(rec)
        link_record(reg, rec)


def test_backward_references_link_immediately() -> None:
    reg = Registry()
    insert_all(reg, person(1), person(2), person(3, father="@I1@", mother="@I2@"))

    child = reg.get(3)
    assert child.father_id == 1
    assert child.father == ("I", 1)
    assert child.mother_id == 2
    assert reg.get(1).children == [("I", 3)]
    assert reg.get(2).children == [("I", 3)]
    assert reg.pending == []


def test_forward_references_are_deferred_then_resolved() -> None:
    reg = Registry()
    insert_all(reg, person(3, father="@I1@"), person(1))

    assert reg.get(3).father_id is None
    assert len(reg.pending) == 1

    dangling = resolve_pending(reg)

    assert dangling == []
    assert reg.get(3).father_id == 1
    assert reg.get(1).children == [("I", 3)]
    assert reg.pending == []


def test_shared_father_across_children() -> None:
    reg = Registry()
    insert_all(reg, person(1), person(2, father="@I1@"), person(3, father="@I1@"))

    assert reg.father_of(reg.get(2)) is reg.father_of(reg.get(3))
    assert reg.get(1).children == [("I", 2), ("I", 3)]


def test_missing_target_is_dangling_not_fatal() -> None:
    reg = Registry()
    insert_all(reg, person(1, mother="@I99@"))

    dangling = resolve_pending(reg)

    assert len(dangling) == 1
    assert dangling[0].source_id == 1
    assert dangling[0].source_xref == "@I1@"
    assert dangling[0].role == "mother"
    assert dangling[0].target == "@I99@"
    assert dangling[0].reason == "missing"
    assert dangling[0].lineno == 12
    assert reg.get(1).mother_id is None
    assert reg.diagnostics.dangling == dangling


def test_malformed_and_duplicate_references() -> None:
    reg = Registry()
    rec = person(1, father="John Smith")
    rec.tags.append(Tag("FATH", "@I5@"))
    insert_all(reg, rec)

    reasons = sorted(d.reason for d in reg.diagnostics.dangling)
    assert reasons == ["duplicate", "malformed"]
    assert reg.pending == []


def test_target_is_looked_up_by_code_and_number() -> None:
    reg = Registry()
    insert_all(reg, person(1, code="F"), person(2, father="@I1@"))
    # @F1@ exists but @I1@ does not
    assert reg.pending and reg.get(2).father_id is None

    insert_all(reg, person(1))
    assert resolve_pending(reg) == []
    assert reg.get(2, code="I").father == ("I", 1)
    assert reg.get(1, code="I").children == [("I", 2)]
    assert reg.get(1, code="F").children == []


def test_parent_of_another_kind_is_a_type_mismatch() -> None:
    reg = Registry()
    insert_all(reg, person(1, code="F"), person(2, father="@F1@"))

    assert reg.get(2).father_id is None
    assert [d.reason for d in reg.diagnostics.dangling] == ["type mismatch"]


def test_cycles_are_refused() -> None:
    reg = Registry()
    insert_all(reg, person(1, father="@I2@"), person(2, father="@I1@"))
    resolve_pending(reg)

    # exactly one of the two links can hold
    linked = [r for r in reg if r.father_id is not None]
    assert len(linked) == 1
    assert [d.reason for d in reg.diagnostics.dangling] == ["cycle"]


def test_self_reference_is_a_cycle() -> None:
    reg = Registry()
    insert_all(reg, person(1, father="@I1@"))
    assert reg.get(1).father_id is None
    assert reg.get(1).children == []
    assert reg.diagnostics.dangling[0].reason == "cycle"


def test_custom_relationship_tags() -> None:
    reg = Registry()
    child = Record(ident=2, rtype="I", tags=[Tag("_DAD", "@I1@")])
    reg.insert(Record(ident=1, rtype="I"))
    reg.insert(child)
    link_record(reg, child, {"father": "_DAD"})

    assert child.father_id == 1
    assert child.father == ("I", 1)
