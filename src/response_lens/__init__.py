"""response-lens: analysis and multi-view projection of JSON API responses."""

from __future__ import annotations

from response_lens.analysis import Schema, Stats
from response_lens.api import (
    analyze,
    analyze_stats,
    export,
    infer_schema,
    project,
    search,
)
from response_lens.config import ExportFormat, ViewerConfig, ViewMode
from response_lens.errors import (
    CyclicStructureError,
    NotTabularError,
    ParseError,
    PathNotFoundError,
    PayloadTooDeepError,
    PayloadTooLargeError,
    ResponseLensError,
    SerializationFailure,
)
from response_lens.navigation import NavigationState
from response_lens.result import Analysis
from response_lens.search import MatchKind, SearchResult
from response_lens.session import ResponseSession
from response_lens.tree import Path, Value, ValueKind, ingest

__version__: str = "0.1.0"
__all__: list[str] = [
    "Analysis",
    "CyclicStructureError",
    "ExportFormat",
    "MatchKind",
    "NavigationState",
    "NotTabularError",
    "ParseError",
    "Path",
    "PathNotFoundError",
    "PayloadTooDeepError",
    "PayloadTooLargeError",
    "ResponseLensError",
    "ResponseSession",
    "Schema",
    "SearchResult",
    "SerializationFailure",
    "Stats",
    "Value",
    "ValueKind",
    "ViewMode",
    "ViewerConfig",
    "analyze",
    "analyze_stats",
    "export",
    "infer_schema",
    "ingest",
    "project",
    "search",
]
