# tests/test_document.py

from __future__ import annotations

import pytest

from gedex.core.exceptions import StructureError
from gedex.loader import DocumentState, GedEx, tokenize_line, tokenize_lines


def run(text: str, **kwargs) -> GedEx:
    machine = GedEx(**kwargs)
    machine.feed_all(tokenize_lines(text.splitlines()))
    return machine


def test_initial_to_record_tag_on_header() -> None:
    machine = GedEx()
    assert machine.state is DocumentState.INITIAL
    assert machine.feed(tokenize_line("0 HEAD", 1)) is DocumentState.RECORD_TAG
    assert machine.can_advance
    assert not machine.successful


def test_header_with_content_is_invalid() -> None:
    machine = run("0 HEAD something\n0 @I1@ INDI\n")
    assert machine.state is DocumentState.INVALID
    assert not machine.can_advance


@pytest.mark.parametrize("first", ["0 @I1@ INDI", "1 HEAD", "0 TRLR", "garbage"])
def test_anything_but_header_first_is_invalid(first: str) -> None:
    machine = GedEx()
    assert machine.feed(tokenize_line(first, 1)) is DocumentState.INVALID
    assert machine.error is not None
    assert machine.error.lineno == 1


def test_invalid_discards_further_input() -> None:
    machine = GedEx()
    machine.feed(tokenize_line("0 @I1@ INDI", 1))
    assert machine.feed(tokenize_line("0 HEAD", 2)) is DocumentState.INVALID
    assert len(machine.registry) == 0


def test_feed_all_stops_consuming_after_invalid() -> None:
    consumed = []

    def lines():
        for ln in ("0 NOPE", "0 HEAD", "0 @I1@ INDI"):
            consumed.append(ln)
            yield tokenize_line(ln, len(consumed))

    machine = GedEx()
    machine.feed_all(lines())
    assert consumed == ["0 NOPE"]


def test_successful_only_after_a_closed_block() -> None:
    machine = run("0 HEAD\n1 CHAR UTF-8\n")
    assert machine.state is DocumentState.RECORD_TAG
    assert not machine.successful

    machine.feed(tokenize_line("0 @I1@ INDI", 3))
    assert machine.successful


def test_reference_state_after_level0_data_block() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\n0 TRLR\n")
    assert machine.state is DocumentState.REFERENCE
    assert not machine.successful
    assert machine.can_advance

    machine.feed(tokenize_line("0 @I2@ INDI", 4))
    assert machine.state is DocumentState.RECORD_TAG

    registry = machine.fold()
    assert sorted(r.ident for r in registry) == [1, 2]
    assert [t.name for t in registry.extra_blocks] == ["TRLR"]


def test_level_jump_drives_machine_invalid() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\n1 NAME John\n3 DATE x\n1 SEX M\n")
    assert machine.state is DocumentState.INVALID
    assert machine.error.lineno == 4


def test_duplicate_header_is_invalid() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\n0 HEAD\n")
    assert machine.state is DocumentState.INVALID


def test_same_number_with_different_codes_are_separate_records() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\n0 @F1@ FAM\n0 TRLR\n")
    registry = machine.fold()

    assert len(registry) == 2
    assert registry.get(1, code="I").rtype == "I"
    assert registry.get(1, code="F").rtype == "F"


def test_duplicate_identifier_is_invalid() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\n0 @I1@ INDI\n0 TRLR\n")
    assert machine.state is DocumentState.INVALID
    assert machine.error.lineno == 3
    assert "duplicate identifier @I1@" in str(machine.error)


def test_unrecognized_lines_are_counted_not_folded() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\n1 NAME John\nnot a line\n1 SEX M\n")
    registry = machine.fold()

    record = registry.get(1)
    assert [t.name for t in record.tags] == ["NAME", "SEX"]
    assert [u.lineno for u in registry.diagnostics.unparsed] == [4]


def test_strict_mode_rejects_unrecognized_lines() -> None:
    machine = run("0 HEAD\n0 @I1@ INDI\nnot a line\n", strict=True)
    assert machine.state is DocumentState.INVALID


def test_fold_in_initial_or_invalid_is_an_error() -> None:
    with pytest.raises(StructureError, match="not recognized document"):
        GedEx().fold()

    machine = run("0 HEAD\n2 FOO\n")
    with pytest.raises(StructureError, match="not recognized document"):
        machine.fold()


def test_header_block_is_kept_but_not_a_record() -> None:
    registry = run("0 HEAD\n1 SOUR gedex\n2 VERS 0.1\n").fold()
    assert len(registry) == 0
    assert registry.header is not None
    assert registry.header.name == "HEAD"
    assert registry.header.find_first("SOUR").first_content("VERS") == "0.1"


def test_custom_header_tag() -> None:
    machine = run("0 HDR\n0 @I1@ INDI\n", header_tag="HDR")
    assert len(machine.fold()) == 1


def test_nested_reference_line_is_folded_as_tag() -> None:
    registry = run("0 HEAD\n0 @N1@ NOTE Some text\n1 @S2@ SOUR\n").fold()
    record = registry.get(1)
    assert record.rtype == "N"
    assert [t.name for t in record.tags] == ["@S2@"]
    assert record.tags[0].content == "SOUR"
