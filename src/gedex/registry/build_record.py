from __future__ import annotations

from typing import Optional, Tuple

from gedex.loader.folder import Tag
from gedex.loader.tokenizer import DataLine, RefLine
from gedex.registry.entities import Record, resolve_kind


def _split_record_tag(content: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """``"NOTE Some text"`` -> ``("NOTE", "Some text")``."""
    if not content:
        return None, None
    parts = content.split(" ", 1)
    rest = parts[1] if len(parts) > 1 and parts[1] else None
    return parts[0], rest


def tag_for_line(line: DataLine | RefLine) -> Tag:
    """Create the accumulation unit a typed line opens."""
    if isinstance(line, DataLine):
        return Tag(name=line.tag, content=line.content, lineno=line.lineno)

    record_tag, rest = _split_record_tag(line.content)
    if line.level == 0:
        return Tag(name=record_tag or line.code, content=rest, lineno=line.lineno)

    # Nested reference lines keep their xref as the tag name
    return Tag(name=f"@{line.code}{line.ident}@", content=line.content, lineno=line.lineno)


def build_record(ref: RefLine, block: Tag) -> Record:
    """Turn a folded level-0 reference block into a Record."""
    if ref.level != 0:
        raise ValueError(f"Expected level-0 reference line, got level {ref.level}")

    record_tag, _ = _split_record_tag(ref.content)

    return Record(
        ident=ref.ident,
        rtype=ref.code,
        kind=resolve_kind(ref.code, record_tag),
        name=block.first_content("NAME") or "",
        tags=list(block.children),
        lineno=ref.lineno,
    )
