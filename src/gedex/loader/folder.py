# src/gedex/loader/folder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from gedex.core.exceptions import StructureError


@dataclass
class Tag:
    """
    An accumulation unit built while folding a block of lines.

    Attributes:
        name: Tag name (NAME, BIRT, DATE, ...) or, for a reference block
              root, the record tag (INDI, FAM, ...).
        content: Optional verbatim text content.
        children: Nested units, in original line order.
        lineno: Line number in the original input (for diagnostics).
    """

    name: str
    content: Optional[str] = None
    children: List["Tag"] = field(default_factory=list)
    lineno: int = 0

    def add_child(self, child: "Tag") -> None:
        self.children.append(child)

    def find_children(self, name: str) -> List["Tag"]:
        """Return all direct children with a given name."""
        return [c for c in self.children if c.name == name]

    def find_first(self, name: str) -> Optional["Tag"]:
        """Return the first direct child with this name, or None."""
        for c in self.children:
            if c.name == name:
                return c
        return None

    def first_content(self, name: str) -> Optional[str]:
        child = self.find_first(name)
        return child.content if child is not None else None

    def iter_subtree(self) -> Iterator["Tag"]:
        """Yield this unit and all descendants in depth-first order."""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def __repr__(self) -> str:
        content = f" {self.content!r}" if self.content is not None else ""
        return f"<Tag {self.name}{content} children={len(self.children)}>"


class TagFolder:
    """
    Level-stack reducer.

    Units are pushed with the level they were opened at. Pushing at a level
    that is not deeper than the current one first folds every open unit at
    that level or below into its parent (deepest first), so each parent
    receives its children in line order. A unit folded with no parent left
    on the stack is a completed top-level unit.
    """

    def __init__(self, base_level: int = 0):
        self.base_level = base_level
        self._stack: List[Tuple[int, Tag]] = []
        self.completed: List[Tag] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def deepest_level(self) -> Optional[int]:
        return self._stack[-1][0] if self._stack else None

    def _fold_top(self) -> None:
        _, node = self._stack.pop()
        if self._stack:
            self._stack[-1][1].add_child(node)
        else:
            self.completed.append(node)

    def push(self, level: int, tag: Tag) -> None:
        """
        Open ``tag`` at ``level``.

        Raises:
            StructureError: on a negative level, a first unit not at the base
                level, or a jump of more than one level deeper.
        """
        if level < self.base_level:
            raise StructureError(
                f"level {level} is below the block level {self.base_level}",
                lineno=tag.lineno,
            )

        if not self._stack:
            if level != self.base_level:
                raise StructureError(
                    f"block must open at level {self.base_level}, got {level}",
                    lineno=tag.lineno,
                )
            self._stack.append((level, tag))
            return

        deepest = self._stack[-1][0]
        if level > deepest + 1:
            raise StructureError(
                f"level jumped from {deepest} to {level} without intermediate parent",
                lineno=tag.lineno,
            )

        while self._stack and self._stack[-1][0] >= level:
            self._fold_top()

        self._stack.append((level, tag))

    def finish(self) -> Tag:
        """
        Fold everything still open and return the single top-level unit.

        Raises:
            StructureError: if nothing was ever pushed, or the folded stack did
                not reduce to exactly one top-level unit.
        """
        if not self._stack and not self.completed:
            raise StructureError("nothing to fold: no open block at end of input")

        while self._stack:
            self._fold_top()

        if len(self.completed) != 1:
            raise StructureError(
                f"block folded into {len(self.completed)} top-level units, expected 1"
            )
        return self.completed[0]
