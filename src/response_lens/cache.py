"""AnalysisCache: LRU-backed cache of analyses keyed by root location.

A session analyses each root it displays once.  Drilling into a sub-value
and coming back must not recompute the parent's statistics and schema, so
analyses are cached under the absolute ``Path`` of the root they describe.
LRU eviction occurs silently when ``max_size`` is exceeded.

Each ``AnalysisCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two sessions never see each other's entries.

Example::

    cache = AnalysisCache(max_size=16)
    analysis = cache.get_or_compute(Path(), value)   # computes
    analysis = cache.get_or_compute(Path(), value)   # served from memory
"""

from __future__ import annotations

import logging
import time

from cachetools import LRUCache

from response_lens.analysis.schema import SchemaInferencer
from response_lens.analysis.stats import StatisticsCollector
from response_lens.config import ViewerConfig
from response_lens.result import Analysis
from response_lens.tree.path import Path
from response_lens.tree.value import Value

logger = logging.getLogger(__name__)

__all__ = ["AnalysisCache", "analyze"]


def analyze(value: Value, config: ViewerConfig | None = None) -> Analysis:
    """Run statistics collection and schema inference over ``value``."""
    config = config if config is not None else ViewerConfig()
    t0 = time.perf_counter()
    stats = StatisticsCollector(config).collect(value)
    schema = SchemaInferencer(config).infer(value)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    return Analysis(stats=stats, schema=schema, computation_time_ms=elapsed_ms)


class AnalysisCache:
    """LRU cache of ``Analysis`` results for one session.

    Args:
        config: Passed to the collector and inferencer on a miss.
        max_size: Maximum number of analyses kept.  Defaults to
            ``config.analysis_cache_size``.
    """

    def __init__(
        self, config: ViewerConfig | None = None, max_size: int | None = None
    ) -> None:
        self._config = config if config is not None else ViewerConfig()
        size = max_size if max_size is not None else self._config.analysis_cache_size
        self._cache: LRUCache[Path, tuple[Value, Analysis]] = LRUCache(maxsize=size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_or_compute(self, location: Path, value: Value) -> Analysis:
        """Return the analysis of ``value`` found at ``location``.

        An entry is only reused when it was computed for this very Value
        object; a different Value at the same location (a new response)
        replaces it.
        """
        entry = self._cache.get(location)
        if entry is not None and entry[0] is value:
            return entry[1]

        analysis = analyze(value, self._config)
        self.store(location, value, analysis)
        logger.debug(
            "analysed %s at %r in %.2f ms",
            value.type_label,
            str(location),
            analysis.computation_time_ms,
        )
        return analysis

    def store(self, location: Path, value: Value, analysis: Analysis) -> None:
        """Record an analysis computed outside the cache."""
        self._cache[location] = (value, analysis)

    def clear(self) -> None:
        self._cache.clear()
