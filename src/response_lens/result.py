"""Analysis dataclass: the cached output of one analyze pass."""

from __future__ import annotations

from dataclasses import dataclass

from response_lens.analysis.schema import Schema
from response_lens.analysis.stats import Stats

__all__ = ["Analysis"]


@dataclass(frozen=True, slots=True)
class Analysis:
    """Statistics and schema computed together for one root Value.

    Attributes:
        stats: Structural statistics (see ``StatisticsCollector``).
        schema: Inferred structural schema (see ``SchemaInferencer``).
        computation_time_ms: Wall-clock duration of the analysis in milliseconds.
    """

    stats: Stats
    schema: Schema
    computation_time_ms: float
