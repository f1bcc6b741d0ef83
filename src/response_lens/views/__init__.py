"""Views subpackage: view models and the projector that builds them.

Import from this module to stay on the stable public interface::

    from response_lens.views import project, TableView, UnavailableView
"""

from __future__ import annotations

from response_lens.views.models import (
    CellKind,
    ListCard,
    ListView,
    Page,
    RawView,
    SchemaNodeView,
    SchemaView,
    SearchView,
    StatsView,
    TableCell,
    TableRow,
    TableView,
    TreeNodeKind,
    TreeNodeView,
    TreeView,
    UnavailableView,
    ViewModel,
)
from response_lens.views.projector import (
    SUMMARY_FIELDS,
    SUMMARY_MAX_CHARS,
    card_summary,
    project,
    project_list,
    project_raw,
    project_schema,
    project_search,
    project_stats,
    project_table,
    project_tree,
    stats_headline,
)

__all__ = [
    "SUMMARY_FIELDS",
    "SUMMARY_MAX_CHARS",
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
    "card_summary",
    "project",
    "project_list",
    "project_raw",
    "project_schema",
    "project_search",
    "project_stats",
    "project_table",
    "project_tree",
    "stats_headline",
]
