"""ViewerConfig, ViewMode and ExportFormat.

ViewerConfig is a frozen (immutable) dataclass holding every tunable of the
engine.  ViewMode names the projections a session can render; ExportFormat
names the byte-stream formats the exporter writes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum, auto
from typing import Any

from response_lens.normalizer import KeyNormalizer
from response_lens.tree.value import MAX_NESTING_DEPTH

__all__ = ["ExportFormat", "ViewMode", "ViewerConfig"]

_normalizer = KeyNormalizer()


class ViewMode(StrEnum):
    """The projections of a response.

    - RAW:    pretty-printed JSON text.
    - TABLE:  rows/columns for an Object or an Array of Objects.
    - TREE:   collapsible node tree.
    - LIST:   one summary card per element.
    - SCHEMA: the inferred structural schema.
    - STATS:  structural statistics.
    - SEARCH: key/value search results.
    """

    RAW = auto()
    TABLE = auto()
    TREE = auto()
    LIST = auto()
    SCHEMA = auto()
    STATS = auto()
    SEARCH = auto()


class ExportFormat(StrEnum):
    """Export byte-stream formats."""

    JSON = auto()
    CSV = auto()
    XML = auto()


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    """Immutable configuration for a response session.

    Attributes:
        max_table_rows: Rows, list cards or tree children rendered per page (>= 1).
        max_tree_depth: Hard depth limit of the tree view (>= 1).
        auto_expand_depth: Tree nodes shallower than this start expanded (>= 0).
        enable_type_detection: When True, schema inference records format
            hints (email, uri, date-time) on string properties.
        enable_pattern_recognition: When True, statistics count emails, URLs,
            dates and ids among string values.
        max_nodes: Ingestion ceiling on total node count.  ``None`` disables it.
        max_nesting_depth: Ingestion ceiling on nesting depth (root = 0).
            ``None`` disables it.
        analysis_cache_size: Analyses kept per session in an LRU cache (>= 1).
        export_root_name: Default root element name for XML export.
    """

    max_table_rows: int = 1000
    max_tree_depth: int = 10
    auto_expand_depth: int = 2
    enable_type_detection: bool = True
    enable_pattern_recognition: bool = True
    max_nodes: int | None = 1_000_000
    max_nesting_depth: int | None = MAX_NESTING_DEPTH
    analysis_cache_size: int = 32
    export_root_name: str = "response"

    def __post_init__(self) -> None:
        if self.max_table_rows < 1:
            msg = f"max_table_rows must be >= 1, got {self.max_table_rows}"
            raise ValueError(msg)
        if self.max_tree_depth < 1:
            msg = f"max_tree_depth must be >= 1, got {self.max_tree_depth}"
            raise ValueError(msg)
        if self.auto_expand_depth < 0:
            msg = f"auto_expand_depth must be >= 0, got {self.auto_expand_depth}"
            raise ValueError(msg)
        if self.max_nodes is not None and self.max_nodes < 1:
            msg = f"max_nodes must be >= 1 or None, got {self.max_nodes}"
            raise ValueError(msg)
        if self.max_nesting_depth is not None and self.max_nesting_depth < 1:
            msg = (
                "max_nesting_depth must be >= 1 or None, "
                f"got {self.max_nesting_depth}"
            )
            raise ValueError(msg)
        if self.analysis_cache_size < 1:
            msg = f"analysis_cache_size must be >= 1, got {self.analysis_cache_size}"
            raise ValueError(msg)
        if not self.export_root_name:
            msg = "export_root_name must not be empty"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ViewerConfig:
        """Build a config from loosely spelled option names.

        ``{"maxTableRows": 50, "enable-type-detection": False}`` and their
        snake_case spellings are all accepted.

        Raises:
            ValueError: On an unknown option or an invalid value.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _normalizer.normalize(key)
            if name not in known:
                msg = f"unknown viewer option {key!r}"
                raise ValueError(msg)
            kwargs[name] = value
        return cls(**kwargs)
