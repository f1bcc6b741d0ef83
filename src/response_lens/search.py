"""SearchEngine: case-insensitive key/value substring search over a Value.

Traversal is depth-first and parent-before-child.  For every object member
the key is tested first (a ``key`` match), then the member's value when it
is a String or Number leaf (a ``value`` match), then containers are
descended.  Array elements are tested as values at their index path.
Numbers are matched through their shortest decimal text (``3.0`` -> ``"3"``).
Booleans and nulls never match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum, auto

from response_lens.tree.path import Path
from response_lens.tree.value import CycleGuard, Value, ValueKind, format_number

__all__ = ["MatchKind", "SearchEngine", "SearchResult"]


class MatchKind(StrEnum):
    KEY = auto()
    VALUE = auto()


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One hit.

    Attributes:
        path: Where the hit is, relative to the searched root.
        matched_text: The key (for KEY hits) or the leaf text (for VALUE hits).
        match_kind: Whether the key or the value matched.
    """

    path: Path
    matched_text: str
    match_kind: MatchKind

    def highlight(self, query: str) -> list[tuple[str, bool]]:
        """Split ``matched_text`` into ``(fragment, is_match)`` spans."""
        if not query:
            return [(self.matched_text, False)]
        pattern = re.compile(re.escape(query), re.IGNORECASE)
        spans: list[tuple[str, bool]] = []
        pos = 0
        for match in pattern.finditer(self.matched_text):
            if match.start() > pos:
                spans.append((self.matched_text[pos : match.start()], False))
            spans.append((match.group(0), True))
            pos = match.end()
        if pos < len(self.matched_text):
            spans.append((self.matched_text[pos:], False))
        return spans


def _leaf_text(node: Value) -> str | None:
    match node.kind:
        case ValueKind.STRING:
            return node.data
        case ValueKind.NUMBER:
            return format_number(node.data)
        case _:
            return None


class SearchEngine:
    """Finds keys and leaf values containing a query string.

    Example::

        engine = SearchEngine()
        hits = engine.search(ingest({"name": "Alice"}), "alice")
        # [SearchResult(path=Path(("name",)), matched_text="Alice",
        #               match_kind=MatchKind.VALUE)]
    """

    def search(self, root: Value, query: str) -> list[SearchResult]:
        """Return every hit for ``query`` under ``root`` in traversal order.

        An empty query returns ``[]`` without walking the tree.

        Raises:
            CyclicStructureError: If ``root`` refers back to an ancestor.
        """
        if not query:
            return []
        needle = query.lower()
        results: list[SearchResult] = []
        self._visit(root, Path(), needle, results, CycleGuard())
        return results

    def _visit(
        self,
        node: Value,
        path: Path,
        needle: str,
        results: list[SearchResult],
        guard: CycleGuard,
    ) -> None:
        if not node.is_container:
            text = _leaf_text(node)
            if text is not None and needle in text.lower():
                results.append(SearchResult(path, text, MatchKind.VALUE))
            return

        with guard.enter(node):
            for segment, child in node.children():
                child_path = path.child(segment)
                if isinstance(segment, str) and needle in segment.lower():
                    results.append(SearchResult(child_path, segment, MatchKind.KEY))
                self._visit(child, child_path, needle, results, guard)
