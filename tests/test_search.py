"""Unit tests for SearchEngine and SearchResult."""

from __future__ import annotations

from typing import Any

import pytest

from response_lens.errors import CyclicStructureError
from response_lens.search import MatchKind, SearchEngine, SearchResult
from response_lens.tree import Path, Value, ingest


@pytest.fixture
def engine() -> SearchEngine:
    return SearchEngine()


def _hits(engine: SearchEngine, raw: Any, query: str) -> list[tuple[str, str, str]]:
    return [
        (str(r.path), r.matched_text, str(r.match_kind))
        for r in engine.search(ingest(raw), query)
    ]


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestMatching:
    def test_case_insensitive_values(self, engine: SearchEngine) -> None:
        hits = _hits(engine, {"name": "Alice", "note": "alice@example.com"}, "alice")
        assert hits == [
            ("name", "Alice", "value"),
            ("note", "alice@example.com", "value"),
        ]

    def test_key_match_precedes_value_match(self, engine: SearchEngine) -> None:
        assert _hits(engine, {"id": "ID-1"}, "id") == [
            ("id", "id", "key"),
            ("id", "ID-1", "value"),
        ]

    def test_numbers_match_by_shortest_text(self, engine: SearchEngine) -> None:
        assert _hits(engine, {"a": 3.0, "b": 1.25}, "3") == [("a", "3", "value")]
        assert _hits(engine, [1.25], "1.2") == [("[0]", "1.25", "value")]

    def test_booleans_and_nulls_never_match(self, engine: SearchEngine) -> None:
        assert _hits(engine, {"a": True, "b": None}, "true") == []
        assert _hits(engine, {"a": True, "b": None}, "null") == []

    def test_parent_before_child(self, engine: SearchEngine) -> None:
        hits = _hits(engine, {"user": {"username": "u"}, "users": ["user1"]}, "user")
        assert [path for path, _, _ in hits] == [
            "user",
            "user.username",
            "users",
            "users[0]",
        ]

    def test_primitive_root(self, engine: SearchEngine) -> None:
        results = engine.search(ingest("Hello"), "ell")
        assert results == [SearchResult(Path(), "Hello", MatchKind.VALUE)]

    def test_empty_query_returns_nothing(self, engine: SearchEngine) -> None:
        assert engine.search(ingest({"a": "a"}), "") == []

    def test_no_matches(self, engine: SearchEngine) -> None:
        assert _hits(engine, {"a": "b"}, "zzz") == []

    def test_completeness(self, engine: SearchEngine) -> None:
        raw = {"ab": ["xab", {"cab": "none"}], "x": 12, "y": "AB"}
        hits = _hits(engine, raw, "ab")
        assert set(hits) == {
            ("ab", "ab", "key"),
            ("ab[0]", "xab", "value"),
            ("ab[1].cab", "cab", "key"),
            ("y", "AB", "value"),
        }

    def test_cycle_raises(self, engine: SearchEngine) -> None:
        members: dict[str, Value] = {}
        looped = Value.object(members)
        members["again"] = looped
        with pytest.raises(CyclicStructureError):
            engine.search(looped, "again")


# ---------------------------------------------------------------------------
# Highlighting
# ---------------------------------------------------------------------------


class TestHighlight:
    def test_spans(self) -> None:
        result = SearchResult(Path(), "Alice and ALICE", MatchKind.VALUE)
        assert result.highlight("alice") == [
            ("Alice", True),
            (" and ", False),
            ("ALICE", True),
        ]

    def test_regex_characters_are_literal(self) -> None:
        result = SearchResult(Path(), "a.b*c", MatchKind.VALUE)
        assert result.highlight(".b*") == [("a", False), (".b*", True), ("c", False)]

    def test_empty_query(self) -> None:
        result = SearchResult(Path(), "text", MatchKind.KEY)
        assert result.highlight("") == [("text", False)]
