# tests/test_folder.py

from __future__ import annotations

import pytest

from gedex.core.exceptions import StructureError
from gedex.loader import Tag, TagFolder


def fold(pairs):
    """Push (level, name) pairs into a fresh folder and finish it."""
    folder = TagFolder()
    for lineno, (level, name) in enumerate(pairs, start=1):
        folder.push(level, Tag(name=name, lineno=lineno))
    return folder.finish()


def shape(tag: Tag):
    return (tag.name, [shape(c) for c in tag.children])


def test_child_push_and_same_level_siblings() -> None:
    root = fold([(0, "INDI"), (1, "NAME"), (1, "SEX"), (1, "BIRT")])
    assert shape(root) == ("INDI", [("NAME", []), ("SEX", []), ("BIRT", [])])


def test_fold_up_to_lower_level_preserves_order() -> None:
    root = fold([
        (0, "INDI"),
        (1, "NAME"),
        (2, "GIVN"),
        (2, "SURN"),
        (1, "BIRT"),
        (2, "DATE"),
        (3, "TIME"),
        (1, "SEX"),
    ])
    assert shape(root) == (
        "INDI",
        [
            ("NAME", [("GIVN", []), ("SURN", [])]),
            ("BIRT", [("DATE", [("TIME", [])])]),
            ("SEX", []),
        ],
    )


def test_jump_of_more_than_one_level_is_an_error() -> None:
    folder = TagFolder()
    folder.push(0, Tag("INDI"))
    folder.push(1, Tag("NAME"))
    with pytest.raises(StructureError) as excinfo:
        folder.push(3, Tag("DATE", lineno=9))
    assert excinfo.value.lineno == 9
    assert "jumped from 1 to 3" in str(excinfo.value)


def test_first_unit_must_open_at_base_level() -> None:
    folder = TagFolder()
    with pytest.raises(StructureError):
        folder.push(1, Tag("NAME"))


def test_negative_level_is_an_error() -> None:
    folder = TagFolder()
    folder.push(0, Tag("INDI"))
    with pytest.raises(StructureError):
        folder.push(-1, Tag("NAME"))


def test_finish_on_empty_folder_is_an_error() -> None:
    with pytest.raises(StructureError):
        TagFolder().finish()


def test_same_level_root_becomes_completed_sibling() -> None:
    folder = TagFolder()
    folder.push(0, Tag("HEAD"))
    folder.push(0, Tag("TRLR"))
    assert [t.name for t in folder.completed] == ["HEAD"]
    assert folder.depth == 1
    with pytest.raises(StructureError):
        folder.finish()


def test_depth_tracks_open_units() -> None:
    folder = TagFolder()
    folder.push(0, Tag("INDI"))
    folder.push(1, Tag("BIRT"))
    folder.push(2, Tag("DATE"))
    assert folder.depth == 3
    assert folder.deepest_level == 2
    folder.push(1, Tag("DEAT"))
    assert folder.depth == 2


def test_deep_nesting_does_not_recurse() -> None:
    folder = TagFolder()
    for level in range(0, 100):
        folder.push(level, Tag(f"T{level}"))
    root = folder.finish()

    names = [t.name for t in root.iter_subtree()]
    assert len(names) == 100
    assert names[0] == "T0"
    assert names[-1] == "T99"


def test_tag_helpers() -> None:
    root = Tag("INDI", children=[Tag("NAME", "John"), Tag("NAME", "Johnny"), Tag("SEX", "M")])
    assert root.first_content("NAME") == "John"
    assert [t.content for t in root.find_children("NAME")] == ["John", "Johnny"]
    assert root.find_first("DEAT") is None
    assert root.first_content("DEAT") is None
