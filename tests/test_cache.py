"""Unit tests for AnalysisCache.

Tests cover:
- Cache hits (same location and same Value served from memory)
- Replacement (a different Value at the same location is re-analysed)
- LRU eviction at max_size
- Instance isolation
- Properties (max_size and curr_size)
"""

from __future__ import annotations

import pytest

from response_lens.cache import AnalysisCache, analyze
from response_lens.config import ViewerConfig
from response_lens.tree import Path, ingest


class TestHits:
    def test_second_lookup_is_cached(self) -> None:
        cache = AnalysisCache()
        value = ingest({"a": 1})
        first = cache.get_or_compute(Path(), value)
        assert cache.get_or_compute(Path(), value) is first

    def test_new_value_at_same_location_recomputed(self) -> None:
        cache = AnalysisCache()
        first = cache.get_or_compute(Path(), ingest({"a": 1}))
        second = cache.get_or_compute(Path(), ingest([1, 2]))
        assert second is not first
        assert second.stats.total_arrays == 1
        assert cache.curr_size == 1

    def test_stored_analysis_is_served(self) -> None:
        cache = AnalysisCache()
        value = ingest([1])
        analysis = analyze(value)
        cache.store(Path(), value, analysis)
        assert cache.get_or_compute(Path(), value) is analysis
        assert cache.curr_size == 1


class TestEviction:
    def test_lru_eviction(self) -> None:
        cache = AnalysisCache(max_size=2)
        values = {Path((i,)): ingest([i]) for i in range(3)}
        analyses = {p: cache.get_or_compute(p, v) for p, v in values.items()}
        assert cache.curr_size == 2
        # Path((0,)) was least recently used
        assert cache.get_or_compute(Path((0,)), values[Path((0,))]) is not (
            analyses[Path((0,))]
        )
        assert cache.get_or_compute(Path((2,)), values[Path((2,))]) is (
            analyses[Path((2,))]
        )

    def test_clear(self) -> None:
        cache = AnalysisCache()
        cache.get_or_compute(Path(), ingest(1))
        cache.clear()
        assert cache.curr_size == 0


class TestProperties:
    def test_size_from_config(self) -> None:
        assert AnalysisCache(ViewerConfig(analysis_cache_size=5)).max_size == 5

    def test_explicit_size_wins(self) -> None:
        cache = AnalysisCache(ViewerConfig(analysis_cache_size=5), max_size=7)
        assert cache.max_size == 7

    def test_instances_are_isolated(self) -> None:
        left = AnalysisCache()
        right = AnalysisCache()
        left.get_or_compute(Path(), ingest(1))
        assert right.curr_size == 0


class TestAnalyze:
    def test_config_gates_reach_both_passes(self) -> None:
        config = ViewerConfig(
            enable_pattern_recognition=False, enable_type_detection=False
        )
        result = analyze(ingest({"e": "ada@example.com"}), config)
        assert result.stats.patterns.emails == 0
        assert result.schema.to_dict()["properties"]["e"] == {"type": "string"}

    @pytest.mark.parametrize("raw", [None, [], {"a": [{"b": None}]}])
    def test_timing_recorded(self, raw: object) -> None:
        assert analyze(ingest(raw)).computation_time_ms >= 0.0
