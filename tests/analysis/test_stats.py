"""Unit tests for StatisticsCollector and Stats.

Tests cover:
- Node accounting identity on a variety of shapes
- max_depth matching an independent recursive simulation
- Pattern counters (and their config gate)
- Duplicate string histogram and duplicates()
- numpy-derived StatsSummary
- camelCase wire form
- Idempotence and cycle detection
"""

from __future__ import annotations

from typing import Any

import pytest

from response_lens.analysis.stats import StatisticsCollector, Stats
from response_lens.api import analyze_stats
from response_lens.config import ViewerConfig
from response_lens.errors import CyclicStructureError, SerializationFailure
from response_lens.tree import MAX_NESTING_DEPTH, Value, ValueKind, ingest

SHAPES: list[Any] = [
    None,
    7,
    "x",
    [],
    {},
    {"a": 1, "b": {"c": [1, 2, 3]}},
    [{"id": 1, "tags": ["a", None]}, {"id": 2, "tags": []}, None],
    {"deep": [[[[{"x": None}]]]]},
]


def _depth(node: Value) -> int:
    if not node.is_container:
        return 0
    return 1 + max((_depth(child) for _, child in node.children()), default=-1)


def _count(node: Value) -> int:
    return 1 + sum(_count(child) for _, child in node.children())


@pytest.fixture
def collector() -> StatisticsCollector:
    return StatisticsCollector()


# ---------------------------------------------------------------------------
# Accounting and depth
# ---------------------------------------------------------------------------


class TestAccounting:
    @pytest.mark.parametrize("raw", SHAPES)
    def test_node_accounting_identity(
        self, collector: StatisticsCollector, raw: Any
    ) -> None:
        stats = collector.collect(ingest(raw))
        assert stats.total_nodes == (
            stats.total_objects
            + stats.total_arrays
            + stats.total_primitives
            + stats.null_values
        )

    @pytest.mark.parametrize("raw", SHAPES)
    def test_depth_and_count_match_simulation(
        self, collector: StatisticsCollector, raw: Any
    ) -> None:
        value = ingest(raw)
        stats = collector.collect(value)
        assert stats.max_depth == max(_depth(value), 0)
        assert stats.total_nodes == _count(value)

    def test_reference_document(self, collector: StatisticsCollector) -> None:
        stats = collector.collect(ingest({"a": 1, "b": {"c": [1, 2, 3]}}))
        assert stats.total_nodes == 7
        assert stats.max_depth == 3
        assert stats.total_objects == 2
        assert stats.total_arrays == 1
        assert stats.total_primitives == 4
        assert stats.null_values == 0
        assert stats.array_lengths == [3]
        assert stats.object_sizes == [2, 1]

    def test_empty_containers_count_once(self, collector: StatisticsCollector) -> None:
        stats = collector.collect(ingest({"a": [], "b": {}}))
        assert stats.total_nodes == 3
        assert stats.max_depth == 1
        assert stats.array_lengths == [0]
        assert stats.object_sizes == [2, 0]

    def test_nulls_are_not_typed(self, collector: StatisticsCollector) -> None:
        stats = collector.collect(ingest([None, None, True, 1.5, "s"]))
        assert stats.null_values == 2
        assert stats.data_types == {
            "array": 1,
            "boolean": 1,
            "number": 1,
            "string": 1,
        }
        assert ValueKind.NULL not in stats.data_types

    def test_cycle_raises(self, collector: StatisticsCollector) -> None:
        members: dict[str, Value] = {}
        looped = Value.object(members)
        members["self"] = looped
        with pytest.raises(CyclicStructureError):
            collector.collect(looped)

    def test_payload_at_nesting_ceiling(self, collector: StatisticsCollector) -> None:
        text = '{"a":' * MAX_NESTING_DEPTH + "1" + "}" * MAX_NESTING_DEPTH
        assert collector.collect(ingest(text)).max_depth == MAX_NESTING_DEPTH

    def test_too_deep_to_walk_is_typed(self, collector: StatisticsCollector) -> None:
        node = Value.number(1)
        for _ in range(5000):
            node = Value.object({"a": node})
        with pytest.raises(SerializationFailure, match="nested too deeply"):
            collector.collect(node)


# ---------------------------------------------------------------------------
# Patterns and duplicates
# ---------------------------------------------------------------------------


class TestPatterns:
    DOC = {
        "email": "ada@example.com",
        "site": "https://example.com",
        "born": "1815-12-10",
        "seen": "2024-01-02T03:04:05Z",
        "uuid": "123E4567-E89B-12D3-A456-426614174000",
        "code": "0042",
        "plain": "hello",
        "count": 42,
    }

    def test_counts(self, collector: StatisticsCollector) -> None:
        patterns = collector.collect(ingest(self.DOC)).patterns
        assert patterns.emails == 1
        assert patterns.urls == 1
        assert patterns.dates == 2
        assert patterns.ids == 2

    def test_numbers_are_not_ids(self, collector: StatisticsCollector) -> None:
        assert collector.collect(ingest([1, 2, 3])).patterns.ids == 0

    def test_gate_disables_counting(self) -> None:
        config = ViewerConfig(enable_pattern_recognition=False)
        patterns = StatisticsCollector(config).collect(ingest(self.DOC)).patterns
        assert (patterns.emails, patterns.urls, patterns.dates, patterns.ids) == (
            0,
            0,
            0,
            0,
        )


class TestDuplicates:
    def test_histogram_counts_every_string(
        self, collector: StatisticsCollector
    ) -> None:
        stats = collector.collect(ingest(["a", "b", "a", {"k": "a"}, 1, 1]))
        assert stats.duplicate_values == {"a": 3, "b": 1}

    def test_duplicates_keeps_repeated_only_most_frequent_first(
        self, collector: StatisticsCollector
    ) -> None:
        stats = collector.collect(ingest(["x", "y", "y", "z", "z", "z"]))
        assert list(stats.duplicates().items()) == [("z", 3), ("y", 2)]


# ---------------------------------------------------------------------------
# Summary and wire form
# ---------------------------------------------------------------------------


class TestSummary:
    def test_summary_aggregates(self, collector: StatisticsCollector) -> None:
        stats = collector.collect(ingest({"a": [1, 2, 3], "b": [1], "c": ["d", "d"]}))
        summary = stats.summary()
        assert summary.mean_array_length == pytest.approx(2.0)
        assert summary.median_array_length == pytest.approx(2.0)
        assert summary.max_array_length == 3
        assert summary.mean_object_size == pytest.approx(3.0)
        assert summary.max_object_size == 3
        assert summary.duplicated_strings == 1

    def test_summary_of_primitive(self, collector: StatisticsCollector) -> None:
        summary = collector.collect(ingest("x")).summary()
        assert summary.mean_array_length == 0.0
        assert summary.max_object_size == 0

    def test_to_dict_uses_wire_keys(self, collector: StatisticsCollector) -> None:
        wire = collector.collect(ingest({"a": None})).to_dict()
        assert list(wire) == [
            "totalNodes",
            "totalArrays",
            "totalObjects",
            "totalPrimitives",
            "nullValues",
            "maxDepth",
            "dataTypes",
            "arrayLengths",
            "objectSizes",
            "patterns",
            "duplicateValues",
        ]
        assert wire["nullValues"] == 1
        assert wire["patterns"] == {"emails": 0, "urls": 0, "dates": 0, "ids": 0}


class TestIdempotence:
    @pytest.mark.parametrize("raw", SHAPES)
    def test_repeated_collection_is_equal(
        self, collector: StatisticsCollector, raw: Any
    ) -> None:
        value = ingest(raw)
        first = collector.collect(value)
        second = collector.collect(value)
        assert first.to_dict() == second.to_dict()
        assert first == second

    @pytest.mark.parametrize("raw", SHAPES)
    def test_api_is_idempotent(self, raw: Any) -> None:
        value = ingest(raw)
        assert analyze_stats(value).to_dict() == analyze_stats(value).to_dict()

    def test_default_stats_are_empty(self) -> None:
        assert Stats().total_nodes == 0
