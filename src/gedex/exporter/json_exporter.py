"""
json_exporter.py
Structured JSON exporter for gedex registries.

This exporter:
- Converts records and folded tags to dictionaries (NOT strings)
- Keys records by xref (@I1@) and links father/mother/children the same way
- Includes unparsed-line and dangling-reference diagnostics
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from gedex.loader.folder import Tag
from gedex.logging import get_logger
from gedex.registry.entities import Record, Registry, xref_of

log = get_logger(__name__)


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert a folded Tag (and its subtree) to a dict without recursion."""
    root: Dict[str, Any] = {}
    pending = [(tag, root)]
    while pending:
        node, out = pending.pop()
        out["tag"] = node.name
        out["content"] = node.content
        out["lineno"] = node.lineno
        out["children"] = []
        for child in node.children:
            child_out: Dict[str, Any] = {}
            out["children"].append(child_out)
            pending.append((child, child_out))
    return root


def record_to_dict(record: Record) -> Dict[str, Any]:
    return {
        "id": record.ident,
        "xref": record.xref,
        "type": record.rtype,
        "kind": record.kind.value,
        "name": record.name,
        "father": xref_of(record.father) if record.father else None,
        "mother": xref_of(record.mother) if record.mother else None,
        "children": [xref_of(c) for c in record.children],
        "lineno": record.lineno,
        "tags": [tag_to_dict(t) for t in record.tags],
    }


def build_registry_dict(registry: Registry) -> Dict[str, Any]:
    """
    Convert the in-memory registry into a JSON-safe dict.
    """
    diagnostics = registry.diagnostics
    return {
        "header": tag_to_dict(registry.header) if registry.header else None,
        "records": {
            rec.xref: record_to_dict(rec)
            for _, rec in sorted(registry.records.items())
        },
        "extra_blocks": [tag_to_dict(t) for t in registry.extra_blocks],
        "diagnostics": {
            "unparsed": [
                {"lineno": u.lineno, "raw": u.raw} for u in diagnostics.unparsed
            ],
            "dangling": [
                {
                    "source": d.source_xref,
                    "role": d.role,
                    "target": d.target,
                    "reason": d.reason,
                    "lineno": d.lineno,
                }
                for d in diagnostics.dangling
            ],
        },
    }


def serialize_registry_to_json_string(registry: Registry, indent: int | None = 2) -> str:
    return json.dumps(
        build_registry_dict(registry),
        indent=indent,
        ensure_ascii=False,
    )


def export_registry_json(registry: Registry, output_path: str | Path, indent: int | None = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting registry JSON to: %s (records=%d, unparsed=%d, dangling=%d)",
        output_path,
        len(registry),
        registry.diagnostics.unparsed_count,
        len(registry.diagnostics.dangling),
    )

    json_str = serialize_registry_to_json_string(registry, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
