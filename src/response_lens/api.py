"""Public API functions for response-lens.

Stateless one-shot counterparts of the session operations.  Each call
creates fresh collaborators, guaranteeing zero global state between calls;
use a ``ResponseSession`` when navigation state or cached analyses should
outlive a single call.
"""

from __future__ import annotations

from typing import Any

from response_lens.analysis.schema import Schema, SchemaInferencer
from response_lens.analysis.stats import StatisticsCollector, Stats
from response_lens.cache import analyze as _analyze
from response_lens.config import ExportFormat, ViewerConfig, ViewMode
from response_lens.export.exporter import Exportable, Exporter
from response_lens.navigation import NavigationState
from response_lens.result import Analysis
from response_lens.search import SearchEngine, SearchResult
from response_lens.tree.value import Value, ingest
from response_lens.views.models import ViewModel
from response_lens.views.projector import project as _project

__all__ = ["analyze", "analyze_stats", "export", "infer_schema", "project", "search"]


def _value(raw: Any, config: ViewerConfig) -> Value:
    if isinstance(raw, Value):
        return raw
    return ingest(raw, config.max_nodes, config.max_nesting_depth)


def analyze(raw: Any, config: ViewerConfig | None = None) -> Analysis:
    """Return statistics and schema for a JSON value.

    Args:
        raw:    A ``Value``, JSON bytes/text or a decoded Python tree.
        config: Gates pattern recognition and format detection.

    Raises:
        ParseError: If ``raw`` is not valid JSON.
        SerializationFailure: If ``raw`` nests too deeply to walk.
    """
    config = config if config is not None else ViewerConfig()
    return _analyze(_value(raw, config), config)


def analyze_stats(raw: Any, config: ViewerConfig | None = None) -> Stats:
    """Return the structural statistics of a JSON value."""
    config = config if config is not None else ViewerConfig()
    return StatisticsCollector(config).collect(_value(raw, config))


def infer_schema(raw: Any, config: ViewerConfig | None = None) -> Schema:
    """Return the inferred structural schema of a JSON value."""
    config = config if config is not None else ViewerConfig()
    return SchemaInferencer(config).infer(_value(raw, config))


def search(raw: Any, query: str) -> list[SearchResult]:
    """Return key/value hits for ``query`` (case-insensitive substring)."""
    return SearchEngine().search(_value(raw, ViewerConfig()), query)


def export(
    source: Any,
    fmt: ExportFormat | str,
    root_name: str = "response",
) -> bytes:
    """Serialise a JSON value (or a Stats/Schema) as JSON, CSV or XML bytes.

    Raises:
        SerializationFailure: If the source cannot be serialised.
    """
    if not isinstance(source, Exportable):
        source = ingest(source)
    return Exporter(root_name=root_name).export(source, fmt)


def project(
    raw: Any,
    mode: ViewMode | str,
    config: ViewerConfig | None = None,
    page: int = 0,
) -> ViewModel:
    """Project a JSON value in ``mode`` with default navigation state."""
    config = config if config is not None else ViewerConfig()
    nav = NavigationState(
        root=_value(raw, config), auto_expand_depth=config.auto_expand_depth
    )
    return _project(mode, nav, config, page=page)
