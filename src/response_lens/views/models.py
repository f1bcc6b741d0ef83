"""Data-only view models produced by the projector.

Every model is a frozen dataclass; nothing here knows how it will be drawn.
Interactive elements (drill cells, tree nodes, list cards, search hits)
carry typed ``Path`` values relative to the root they were projected from,
so a presentation layer can turn them straight into drill/select/toggle
calls without building path strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, ClassVar

from response_lens.analysis.stats import StatsSummary
from response_lens.config import ViewMode
from response_lens.search import SearchResult
from response_lens.tree.path import Path
from response_lens.tree.value import Value, ValueKind

__all__ = [
    "CellKind",
    "ListCard",
    "ListView",
    "Page",
    "RawView",
    "SchemaNodeView",
    "SchemaView",
    "SearchView",
    "StatsView",
    "TableCell",
    "TableRow",
    "TableView",
    "TreeNodeKind",
    "TreeNodeView",
    "TreeView",
    "UnavailableView",
    "ViewModel",
]


@dataclass(frozen=True, slots=True)
class Page:
    """Window of a capped sequence.

    Attributes:
        offset: Index of the first item shown.
        shown:  Number of items in this page.
        total:  Number of items overall.
    """

    offset: int
    shown: int
    total: int

    @property
    def remaining(self) -> int:
        """Items after this page."""
        return max(self.total - self.offset - self.shown, 0)

    @property
    def truncated(self) -> bool:
        return self.remaining > 0


# ----------------------------------------------------------------------
# raw / unavailable
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawView:
    mode: ClassVar[ViewMode] = ViewMode.RAW

    text: str


@dataclass(frozen=True, slots=True)
class UnavailableView:
    """A projection that does not apply to the current root."""

    mode: ViewMode
    reason: str


# ----------------------------------------------------------------------
# table
# ----------------------------------------------------------------------


class CellKind(StrEnum):
    VALUE = auto()
    DRILL = auto()
    MISSING = auto()


@dataclass(frozen=True, slots=True)
class TableCell:
    """One table cell.

    VALUE cells hold a primitive's display text.  DRILL cells stand in for
    an Array/Object and carry the ``path`` to drill into.  MISSING cells mark
    a column the row's object does not have.
    """

    kind: CellKind
    text: str = ""
    path: Path | None = None
    value_kind: ValueKind | None = None


@dataclass(frozen=True, slots=True)
class TableRow:
    index: int
    path: Path
    cells: tuple[TableCell, ...]


@dataclass(frozen=True, slots=True)
class TableView:
    mode: ClassVar[ViewMode] = ViewMode.TABLE

    columns: tuple[str, ...]
    rows: tuple[TableRow, ...]
    page: Page


# ----------------------------------------------------------------------
# tree
# ----------------------------------------------------------------------


class TreeNodeKind(StrEnum):
    CONTAINER = auto()
    LEAF = auto()
    DEPTH_LIMIT = auto()


@dataclass(frozen=True, slots=True)
class TreeNodeView:
    """One rendered tree node.

    Collapsed containers have no ``children`` but still report
    ``child_count``.  ``hidden_children`` counts children beyond the
    per-node cap.  A DEPTH_LIMIT node replaces a subtree that sits at or
    below the configured maximum depth.
    """

    kind: TreeNodeKind
    path: Path
    label: str
    depth: int
    summary: str
    value_kind: ValueKind | None = None
    expanded: bool = False
    child_count: int = 0
    hidden_children: int = 0
    selected: bool = False
    children: tuple[TreeNodeView, ...] = ()


@dataclass(frozen=True, slots=True)
class TreeView:
    mode: ClassVar[ViewMode] = ViewMode.TREE

    root: TreeNodeView
    max_depth: int


# ----------------------------------------------------------------------
# list
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ListCard:
    """A collapsible card for one element; ``value`` is the card body."""

    index: int
    path: Path
    summary: str
    type_label: str
    value: Value


@dataclass(frozen=True, slots=True)
class ListView:
    mode: ClassVar[ViewMode] = ViewMode.LIST

    cards: tuple[ListCard, ...]
    page: Page


# ----------------------------------------------------------------------
# schema / stats
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SchemaNodeView:
    name: str
    type: str
    format: str | None = None
    required: bool = False
    length: int | None = None
    children: tuple[SchemaNodeView, ...] = ()


@dataclass(frozen=True, slots=True)
class SchemaView:
    mode: ClassVar[ViewMode] = ViewMode.SCHEMA

    root: SchemaNodeView
    schema: dict[str, Any]


@dataclass(frozen=True, slots=True)
class StatsView:
    """Statistics summary.

    Attributes:
        headline: One-line description, e.g. ``Object{3} • 3 items • 2 levels``.
        stats: The wire form of the statistics (``Stats.to_dict()``).
        summary: numpy-derived aggregates.
        top_duplicates: Most repeated string values with their counts.
    """

    mode: ClassVar[ViewMode] = ViewMode.STATS

    headline: str
    stats: dict[str, Any]
    summary: StatsSummary
    top_duplicates: tuple[tuple[str, int], ...]


# ----------------------------------------------------------------------
# search
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SearchView:
    """Search results; ``prompt`` is True when no query has been entered."""

    mode: ClassVar[ViewMode] = ViewMode.SEARCH

    query: str
    results: tuple[SearchResult, ...]
    page: Page
    prompt: bool = False


ViewModel = (
    RawView
    | UnavailableView
    | TableView
    | TreeView
    | ListView
    | SchemaView
    | StatsView
    | SearchView
)
