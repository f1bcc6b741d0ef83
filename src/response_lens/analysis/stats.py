"""StatisticsCollector: single-pass structural statistics over a Value.

The collector walks the tree depth-first exactly once.  Every node bumps
``total_nodes`` and may raise ``max_depth`` (root = depth 0).  A Null node
only bumps ``null_values``; every other node is counted in ``data_types`` and
in exactly one of ``total_arrays`` / ``total_objects`` / ``total_primitives``,
which keeps the accounting identity::

    total_nodes == total_objects + total_arrays + total_primitives + null_values

String primitives additionally feed the pattern counters and the
``duplicate_values`` histogram.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from response_lens.analysis.patterns import Pattern, classify
from response_lens.config import ViewerConfig
from response_lens.errors import SerializationFailure
from response_lens.tree.value import CycleGuard, Value, ValueKind

__all__ = ["PatternCounts", "Stats", "StatisticsCollector", "StatsSummary"]


@dataclass(slots=True)
class PatternCounts:
    """How many string values looked like each recognised pattern."""

    emails: int = 0
    urls: int = 0
    dates: int = 0
    ids: int = 0

    def record(self, pattern: Pattern) -> None:
        match pattern:
            case Pattern.EMAIL:
                self.emails += 1
            case Pattern.URL:
                self.urls += 1
            case Pattern.DATE:
                self.dates += 1
            case Pattern.ID:
                self.ids += 1


@dataclass(frozen=True, slots=True)
class StatsSummary:
    """Aggregates derived from the raw length/size lists.

    Means and medians are 0.0 when the corresponding list is empty.
    """

    mean_array_length: float
    median_array_length: float
    max_array_length: int
    mean_object_size: float
    max_object_size: int
    duplicated_strings: int


def _describe(samples: list[int]) -> tuple[float, float, int]:
    if not samples:
        return 0.0, 0.0, 0
    arr = np.asarray(samples, dtype=np.int64)
    return float(arr.mean()), float(np.median(arr)), int(arr.max())


@dataclass(slots=True)
class Stats:
    """Aggregate structural statistics of one Value."""

    total_nodes: int = 0
    total_arrays: int = 0
    total_objects: int = 0
    total_primitives: int = 0
    null_values: int = 0
    max_depth: int = 0
    data_types: dict[str, int] = field(default_factory=dict)
    array_lengths: list[int] = field(default_factory=list)
    object_sizes: list[int] = field(default_factory=list)
    patterns: PatternCounts = field(default_factory=PatternCounts)
    duplicate_values: dict[str, int] = field(default_factory=dict)

    def duplicates(self) -> dict[str, int]:
        """String values seen more than once, most frequent first."""
        repeated = [(text, n) for text, n in self.duplicate_values.items() if n > 1]
        repeated.sort(key=lambda item: item[1], reverse=True)
        return dict(repeated)

    def summary(self) -> StatsSummary:
        mean_len, median_len, max_len = _describe(self.array_lengths)
        mean_size, _, max_size = _describe(self.object_sizes)
        return StatsSummary(
            mean_array_length=mean_len,
            median_array_length=median_len,
            max_array_length=max_len,
            mean_object_size=mean_size,
            max_object_size=max_size,
            duplicated_strings=len(self.duplicates()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire form with camelCase keys."""
        return {
            "totalNodes": self.total_nodes,
            "totalArrays": self.total_arrays,
            "totalObjects": self.total_objects,
            "totalPrimitives": self.total_primitives,
            "nullValues": self.null_values,
            "maxDepth": self.max_depth,
            "dataTypes": dict(self.data_types),
            "arrayLengths": list(self.array_lengths),
            "objectSizes": list(self.object_sizes),
            "patterns": {
                "emails": self.patterns.emails,
                "urls": self.patterns.urls,
                "dates": self.patterns.dates,
                "ids": self.patterns.ids,
            },
            "duplicateValues": dict(self.duplicate_values),
        }


class StatisticsCollector:
    """Computes ``Stats`` for a Value in one depth-first pass.

    A collector holds no per-run state between ``collect`` calls, so one
    instance may be reused; running it twice on the same Value yields equal
    results.

    Args:
        config: Only ``enable_pattern_recognition`` is consulted.
    """

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self._config = config if config is not None else ViewerConfig()

    def collect(self, value: Value) -> Stats:
        """Return the statistics of ``value``.

        Raises:
            CyclicStructureError: If ``value`` refers back to an ancestor.
            SerializationFailure: If ``value`` nests too deeply to walk.
        """
        stats = Stats()
        types: Counter[str] = Counter()
        strings: Counter[str] = Counter()
        try:
            self._visit(value, 0, stats, types, strings, CycleGuard())
        except RecursionError as exc:
            msg = "value is nested too deeply to analyse"
            raise SerializationFailure(msg) from exc
        stats.data_types = dict(types)
        stats.duplicate_values = dict(strings)
        return stats

    def _visit(
        self,
        node: Value,
        depth: int,
        stats: Stats,
        types: Counter[str],
        strings: Counter[str],
        guard: CycleGuard,
    ) -> None:
        stats.total_nodes += 1
        stats.max_depth = max(stats.max_depth, depth)

        match node.kind:
            case ValueKind.NULL:
                stats.null_values += 1
                return
            case ValueKind.ARRAY:
                stats.total_arrays += 1
                stats.array_lengths.append(len(node.data))
            case ValueKind.OBJECT:
                stats.total_objects += 1
                stats.object_sizes.append(len(node.data))
            case ValueKind.STRING:
                stats.total_primitives += 1
                strings[node.data] += 1
                if self._config.enable_pattern_recognition:
                    for pattern in classify(node.data):
                        stats.patterns.record(pattern)
            case ValueKind.NUMBER | ValueKind.BOOLEAN:
                stats.total_primitives += 1

        types[str(node.kind)] += 1

        if node.is_container:
            with guard.enter(node):
                for _, child in node.children():
                    self._visit(child, depth + 1, stats, types, strings, guard)
