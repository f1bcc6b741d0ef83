"""ViewProjector: pure functions from (root, navigation state) to view models.

Nothing in this module mutates a Value or the navigation state; it only
reads them.  Each projection is also usable on its own (``project_table``,
``project_tree`` ...); ``project`` dispatches on a ``ViewMode``.

Row, card, search-hit and tree-children counts are capped at
``config.max_table_rows``.  Capped projections report a ``Page`` so callers
can ask for the next page with ``page=n``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from response_lens.analysis.schema import (
    ArraySchema,
    NullSchema,
    ObjectSchema,
    OneOf,
    PrimitiveSchema,
    Schema,
    SchemaInferencer,
)
from response_lens.analysis.stats import StatisticsCollector, Stats
from response_lens.config import ViewerConfig, ViewMode
from response_lens.errors import NotTabularError
from response_lens.search import SearchEngine
from response_lens.tree.path import Path
from response_lens.tree.value import Value, ValueKind
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

if TYPE_CHECKING:
    from response_lens.navigation import NavigationState
    from response_lens.result import Analysis

__all__ = [
    "SUMMARY_FIELDS",
    "SUMMARY_MAX_CHARS",
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

# Fields tried, in order, for a list card's summary line
SUMMARY_FIELDS: tuple[str, ...] = ("title", "name", "id", "key", "label", "summary")
SUMMARY_MAX_CHARS = 40

_TOP_DUPLICATES = 10


def _paginate(total: int, page: int, size: int) -> Page:
    if page < 0:
        msg = f"page must be >= 0, got {page}"
        raise ValueError(msg)
    offset = min(page * size, total)
    return Page(offset=offset, shown=min(size, total - offset), total=total)


# ----------------------------------------------------------------------
# raw
# ----------------------------------------------------------------------


def project_raw(root: Value) -> RawView:
    """Pretty-printed JSON text of ``root`` (2-space indent, key order kept)."""
    return RawView(json.dumps(root.to_python(), indent=2, ensure_ascii=False))


# ----------------------------------------------------------------------
# table
# ----------------------------------------------------------------------


def _table_records(root: Value) -> list[tuple[Path, Value]]:
    match root.kind:
        case ValueKind.OBJECT:
            return [(Path(), root)]
        case ValueKind.ARRAY:
            if any(item.kind is not ValueKind.OBJECT for item in root.data):
                msg = "array elements are not all objects"
                raise NotTabularError(msg)
            return [(Path((i,)), item) for i, item in enumerate(root.data)]
        case _:
            msg = f"a {root.kind} value is not tabular"
            raise NotTabularError(msg)


def _table_cell(record: Value, column: str, row_path: Path) -> TableCell:
    value = record.data.get(column)
    if value is None:
        return TableCell(CellKind.MISSING)
    if value.is_container:
        return TableCell(
            CellKind.DRILL,
            text=value.type_label,
            path=row_path.child(column),
            value_kind=value.kind,
        )
    return TableCell(CellKind.VALUE, text=value.display(), value_kind=value.kind)


def project_table(root: Value, config: ViewerConfig, page: int = 0) -> TableView:
    """Rows/columns for an Object (one row) or an Array of Objects.

    Columns are the union of all object keys in first-seen order, taken over
    every row, not only the current page.

    Raises:
        NotTabularError: If ``root`` is neither an Object nor an Array whose
            elements are all Objects.
    """
    records = _table_records(root)

    columns: dict[str, None] = {}
    for _, record in records:
        columns.update(dict.fromkeys(record.data))

    window = _paginate(len(records), page, config.max_table_rows)
    rows = tuple(
        TableRow(
            index=window.offset + i,
            path=row_path,
            cells=tuple(_table_cell(record, column, row_path) for column in columns),
        )
        for i, (row_path, record) in enumerate(
            records[window.offset : window.offset + window.shown]
        )
    )
    return TableView(columns=tuple(columns), rows=rows, page=window)


# ----------------------------------------------------------------------
# tree
# ----------------------------------------------------------------------


def _tree_node(
    node: Value,
    path: Path,
    label: str,
    nav: NavigationState,
    config: ViewerConfig,
) -> TreeNodeView:
    depth = path.depth
    if depth >= config.max_tree_depth:
        return TreeNodeView(
            kind=TreeNodeKind.DEPTH_LIMIT,
            path=path,
            label=label,
            depth=depth,
            summary="depth limit reached",
            value_kind=node.kind,
            child_count=node.size,
        )

    selected = nav.selected_path == path
    if not node.is_container:
        return TreeNodeView(
            kind=TreeNodeKind.LEAF,
            path=path,
            label=label,
            depth=depth,
            summary=node.display(),
            value_kind=node.kind,
            selected=selected,
        )

    expanded = nav.is_expanded(path)
    children: tuple[TreeNodeView, ...] = ()
    hidden = 0
    if expanded:
        shown = []
        for i, (segment, child) in enumerate(node.children()):
            if i >= config.max_table_rows:
                break
            child_label = f"[{segment}]" if isinstance(segment, int) else segment
            shown.append(
                _tree_node(child, path.child(segment), child_label, nav, config)
            )
        children = tuple(shown)
        hidden = node.size - len(children)

    return TreeNodeView(
        kind=TreeNodeKind.CONTAINER,
        path=path,
        label=label,
        depth=depth,
        summary=node.type_label,
        value_kind=node.kind,
        expanded=expanded,
        child_count=node.size,
        hidden_children=hidden,
        selected=selected,
        children=children,
    )


def project_tree(nav: NavigationState, config: ViewerConfig) -> TreeView:
    """Collapsible tree of the current root.

    Expansion follows ``nav.is_expanded``.  Any node at
    ``depth >= config.max_tree_depth`` is replaced by a DEPTH_LIMIT marker,
    whatever its expansion state.
    """
    return TreeView(
        root=_tree_node(nav.root, Path(), "root", nav, config),
        max_depth=config.max_tree_depth,
    )


# ----------------------------------------------------------------------
# list
# ----------------------------------------------------------------------


def card_summary(node: Value) -> str:
    """Summary line of a list card.

    Objects: the first truthy primitive among ``SUMMARY_FIELDS`` (null,
    ``""``, ``0`` and ``false`` are skipped); then the first non-empty String
    child, cut to ``SUMMARY_MAX_CHARS`` with a ``...`` suffix; then the
    ``Object{n}``/``Array[n]`` placeholder.
    """
    if not node.is_container:
        return node.display()
    if node.kind is ValueKind.OBJECT:
        for name in SUMMARY_FIELDS:
            candidate = node.data.get(name)
            if candidate is not None and not candidate.is_container:
                if candidate.data:
                    return candidate.display()
    for _, child in node.children():
        if child.kind is ValueKind.STRING and child.data:
            text: str = child.data
            if len(text) > SUMMARY_MAX_CHARS:
                return text[:SUMMARY_MAX_CHARS] + "..."
            return text
    return node.type_label


def project_list(root: Value, config: ViewerConfig, page: int = 0) -> ListView:
    """One card per array element; any other root becomes a single card."""
    if root.kind is ValueKind.ARRAY:
        entries = [(Path((i,)), item) for i, item in enumerate(root.data)]
    else:
        entries = [(Path(), root)]

    window = _paginate(len(entries), page, config.max_table_rows)
    cards = tuple(
        ListCard(
            index=window.offset + i,
            path=path,
            summary=card_summary(item),
            type_label=item.type_label,
            value=item,
        )
        for i, (path, item) in enumerate(
            entries[window.offset : window.offset + window.shown]
        )
    )
    return ListView(cards=cards, page=window)


# ----------------------------------------------------------------------
# schema / stats
# ----------------------------------------------------------------------


def _schema_node(name: str, schema: Schema | OneOf, required: bool) -> SchemaNodeView:
    match schema:
        case NullSchema():
            return SchemaNodeView(name=name, type="null", required=required)
        case PrimitiveSchema(type=kind, format=fmt):
            return SchemaNodeView(name=name, type=kind, format=fmt, required=required)
        case ObjectSchema(properties=properties, required=present):
            children = tuple(
                _schema_node(key, child, key in present)
                for key, child in properties.items()
            )
            return SchemaNodeView(
                name=name, type="object", required=required, children=children
            )
        case ArraySchema(items=items, length=length):
            children = () if items is None else (_schema_node("items", items, True),)
            return SchemaNodeView(
                name=name,
                type="array",
                required=required,
                length=length,
                children=children,
            )
        case OneOf(variants=variants):
            children = tuple(
                _schema_node(f"variant {i}", variant, True)
                for i, variant in enumerate(variants)
            )
            return SchemaNodeView(
                name=name, type="oneOf", required=required, children=children
            )
    msg = f"unknown schema node {schema!r}"
    raise TypeError(msg)


def project_schema(schema: Schema) -> SchemaView:
    return SchemaView(root=_schema_node("root", schema, True), schema=schema.to_dict())


def stats_headline(root: Value, stats: Stats) -> str:
    """``Object{3} • 3 items • 2 levels`` style one-liner."""
    items = root.size if root.is_container else 1
    return f"{root.type_label} • {items} items • {stats.max_depth + 1} levels"


def project_stats(root: Value, stats: Stats) -> StatsView:
    top = list(stats.duplicates().items())[:_TOP_DUPLICATES]
    return StatsView(
        headline=stats_headline(root, stats),
        stats=stats.to_dict(),
        summary=stats.summary(),
        top_duplicates=tuple(top),
    )


# ----------------------------------------------------------------------
# search
# ----------------------------------------------------------------------


def project_search(
    root: Value, query: str, config: ViewerConfig, page: int = 0
) -> SearchView:
    """Search hits for ``query``; an empty query yields a prompt view."""
    if not query:
        return SearchView(query="", results=(), page=Page(0, 0, 0), prompt=True)
    hits = SearchEngine().search(root, query)
    window = _paginate(len(hits), page, config.max_table_rows)
    return SearchView(
        query=query,
        results=tuple(hits[window.offset : window.offset + window.shown]),
        page=window,
    )


# ----------------------------------------------------------------------
# dispatch
# ----------------------------------------------------------------------


def project(
    mode: ViewMode | str,
    nav: NavigationState,
    config: ViewerConfig | None = None,
    *,
    analysis: Analysis | None = None,
    page: int = 0,
) -> ViewModel:
    """Project the current root of ``nav`` in the given view mode.

    Args:
        mode:     Which projection to build.
        nav:      Navigation state supplying root, expansion, selection and query.
        config:   Caps and limits.  Defaults to ``ViewerConfig()``.
        analysis: Cached analysis of ``nav.root`` for the schema/stats views;
                  computed on the spot when omitted.
        page:     Zero-based page for capped views.

    Returns:
        The view model.  A table requested on a non-tabular root yields an
        ``UnavailableView`` instead of raising.

    Raises:
        ValueError: If ``mode`` is not a known view mode or ``page`` < 0.
    """
    config = config if config is not None else ViewerConfig()
    mode = ViewMode(mode)
    root = nav.root

    match mode:
        case ViewMode.RAW:
            return project_raw(root)
        case ViewMode.TABLE:
            try:
                return project_table(root, config, page)
            except NotTabularError as exc:
                return UnavailableView(mode=mode, reason=str(exc))
        case ViewMode.TREE:
            return project_tree(nav, config)
        case ViewMode.LIST:
            return project_list(root, config, page)
        case ViewMode.SCHEMA:
            schema = (
                analysis.schema
                if analysis is not None
                else SchemaInferencer(config).infer(root)
            )
            return project_schema(schema)
        case ViewMode.STATS:
            stats = (
                analysis.stats
                if analysis is not None
                else StatisticsCollector(config).collect(root)
            )
            return project_stats(root, stats)
        case ViewMode.SEARCH:
            return project_search(root, nav.search_query, config, page)
