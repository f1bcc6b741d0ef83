"""Path: typed address of a node inside a Value.

A Path is an immutable sequence of segments, each either an object key
(``str``) or an array index (``int``).  Its canonical string form joins keys
with ``.`` and wraps indices in brackets::

    Path(("a", "b", 0, "c"))  ->  "a.b[0].c"
    Path((0, "id"))           ->  "[0].id"
    Path(())                  ->  ""            (the root)

Paths are hashable, so they double as keys for expansion state, selection,
drill-down targets and search results.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from response_lens.errors import PathNotFoundError

if TYPE_CHECKING:
    from response_lens.tree.value import Value

__all__ = ["Path", "Segment"]

Segment = str | int

# One canonical segment: ".key", "key" (leading) or "[index]"
_SEGMENT = re.compile(r"\[(\d+)\]|\.?([^.\[\]]+)")


@dataclass(frozen=True, slots=True)
class Path:
    """Immutable tuple of key/index segments."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Path:
        """Read a canonical path string such as ``"a.b[0].c"``.

        Keys containing ``.``, ``[`` or ``]`` have no canonical text form and
        must be addressed with typed segments instead.

        Raises:
            ValueError: If ``text`` is not a canonical path.
        """
        segments: list[Segment] = []
        pos = 0
        while pos < len(text):
            match = _SEGMENT.match(text, pos)
            is_index = match is not None and match.group(1) is not None
            # Keys need a leading dot everywhere except at the start
            if match is None or (
                not is_index and text.startswith(".", pos) != (pos > 0)
            ):
                msg = f"malformed path {text!r} at offset {pos}"
                raise ValueError(msg)
            index, key = match.groups()
            segments.append(int(index) if index is not None else key)
            pos = match.end()
        return cls(tuple(segments))

    def child(self, segment: Segment) -> Path:
        """Return the path one level below this one."""
        return Path((*self.segments, segment))

    def join(self, other: Path) -> Path:
        """Append another (relative) path to this one."""
        return Path(self.segments + other.segments)

    @property
    def parent(self) -> Path:
        return Path(self.segments[:-1])

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def resolve(self, root: Value) -> Value:
        """Walk this path from ``root`` and return the addressed sub-value.

        Raises:
            PathNotFoundError: If any segment is missing along the way.
        """
        node = root
        for segment in self.segments:
            found = node.child(segment)
            if found is None:
                raise PathNotFoundError(self)
            node = found
        return node

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts)
