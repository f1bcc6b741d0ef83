"""ResponseSession: one viewer over one displayed response.

The session is the explicit per-session context every operation goes
through: it owns a ``NavigationState``, the active ``ViewMode``, the
configuration and an ``AnalysisCache``.  Nothing is kept at module level,
so any number of sessions can live side by side (one per browser tab, per
websocket, per request...) without seeing each other's state.

Error policy:

- ``load`` raises ``ParseError`` (or ``SerializationFailure`` for a ``Value``
  that cannot be analysed) and leaves the previous response in place.
- ``drill_into`` / ``back`` / ``select`` report failure by returning False.
- ``view`` never raises for an inapplicable projection: it returns an
  ``UnavailableView``.
- ``export`` raises ``SerializationFailure`` to its caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal, get_args

from response_lens.cache import AnalysisCache, analyze
from response_lens.config import ExportFormat, ViewerConfig, ViewMode
from response_lens.errors import PathNotFoundError
from response_lens.export.exporter import Exporter
from response_lens.navigation import NavigationState
from response_lens.result import Analysis
from response_lens.search import SearchEngine, SearchResult
from response_lens.tree.path import Path
from response_lens.tree.value import Value, ingest
from response_lens.views.models import ViewModel
from response_lens.views.projector import project

logger = logging.getLogger(__name__)

__all__ = ["ExportTarget", "ResponseSession"]

# What ``export`` serialises
ExportTarget = Literal["value", "stats", "schema"]
_TARGETS = get_args(ExportTarget)


class ResponseSession:
    """Stateful viewer of one response at a time.

    Args:
        config: Viewer configuration.  Defaults to ``ViewerConfig()``.

    Example::

        session = ResponseSession()
        session.load(b'{"users": [{"name": "Ada"}, {"name": "Lin"}]}')
        session.drill_into(Path(("users",)))
        table = session.view(ViewMode.TABLE)
        session.back()
    """

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self._config: ViewerConfig = config if config is not None else ViewerConfig()
        self._nav: NavigationState | None = None
        self._mode: ViewMode = ViewMode.RAW
        self._cache = AnalysisCache(self._config)
        self._exporter = Exporter(root_name=self._config.export_root_name)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> ViewerConfig:
        return self._config

    @property
    def has_response(self) -> bool:
        return self._nav is not None

    @property
    def navigation(self) -> NavigationState:
        """The navigation state of the displayed response.

        Raises:
            LookupError: If nothing is displayed.
        """
        if self._nav is None:
            msg = "no response is displayed"
            raise LookupError(msg)
        return self._nav

    @property
    def root(self) -> Value:
        return self.navigation.root

    @property
    def mode(self) -> ViewMode:
        return self._mode

    @property
    def analysis(self) -> Analysis:
        """Statistics and schema of the current root, cached per location."""
        nav = self.navigation
        return self._cache.get_or_compute(nav.location, nav.root)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self, raw: Any) -> Value:
        """Ingest and display a new response.

        Args:
            raw: JSON bytes/text, a decoded Python tree or a ``Value``.

        Raises:
            ParseError: The payload is malformed; the session is unchanged.
            SerializationFailure: A ``Value`` passed in cannot be analysed;
                the session is unchanged.
        """
        if isinstance(raw, Value):
            value = raw
        else:
            value = ingest(
                raw, self._config.max_nodes, self._config.max_nesting_depth
            )
        self.display(value)
        return value

    def display(self, value: Value) -> None:
        """Analyse ``value`` and then make it the displayed response.

        The previous response stays displayed when analysis fails.
        """
        analysis = analyze(value, self._config)
        self._cache.clear()
        if self._nav is None:
            self._nav = NavigationState(
                root=value, auto_expand_depth=self._config.auto_expand_depth
            )
        else:
            self._nav.reset(value)
        self._cache.store(Path(), value, analysis)
        logger.debug("displaying %s", value.type_label)

    def clear(self) -> None:
        """Forget the displayed response."""
        self._nav = None
        self._cache.clear()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def set_view_mode(self, mode: ViewMode | str) -> bool:
        """Switch the active view; unknown modes are reported with False."""
        try:
            self._mode = ViewMode(mode)
        except ValueError:
            logger.warning("ignoring unknown view mode %r", mode)
            return False
        return True

    def view(self, mode: ViewMode | str | None = None, page: int = 0) -> ViewModel:
        """Project the current root in ``mode`` (default: the active mode)."""
        target = ViewMode(mode) if mode is not None else self._mode
        analysis = None
        if target in (ViewMode.SCHEMA, ViewMode.STATS):
            analysis = self.analysis
        return project(
            target, self.navigation, self._config, analysis=analysis, page=page
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def drill_into(self, path: Path | str) -> bool:
        """Make a sub-value the displayed root.

        Returns:
            False (state unchanged) when ``path`` does not resolve.
        """
        nav = self.navigation
        try:
            target = path if isinstance(path, Path) else Path.parse(path)
            nav.drill_into(target)
        except (PathNotFoundError, ValueError) as exc:
            logger.warning("drill-down failed: %s", exc)
            return False
        return True

    def back(self) -> bool:
        return self.navigation.back()

    def toggle(self, path: Path) -> bool:
        """Flip a tree node's expansion; returns the new state."""
        return self.navigation.toggle(path)

    def expand_all(self) -> None:
        self.navigation.expand_all()

    def collapse_all(self) -> None:
        self.navigation.collapse_all()

    def select(self, path: Path | None) -> bool:
        try:
            self.navigation.select(path)
        except PathNotFoundError as exc:
            logger.warning("selection failed: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def set_search_query(self, query: str) -> list[SearchResult]:
        """Store ``query`` and return its hits under the current root."""
        nav = self.navigation
        nav.search_query = query
        return SearchEngine().search(nav.root, query)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(
        self,
        fmt: ExportFormat | str,
        target: ExportTarget = "value",
        root_name: str | None = None,
    ) -> bytes:
        """Serialise the current root, or its statistics or schema.

        Raises:
            ValueError: Unknown format or target.
            SerializationFailure: The source cannot be serialised.
        """
        match target:
            case "value":
                source: Any = self.root
            case "stats":
                source = self.analysis.stats
            case "schema":
                source = self.analysis.schema
            case _:
                msg = f"unknown export target {target!r}; expected one of {_TARGETS}"
                raise ValueError(msg)
        return self._exporter.export(source, fmt, root_name=root_name)

    def suggested_filename(self, fmt: ExportFormat | str) -> str:
        return self._exporter.suggested_filename(fmt)

    def copy_text(self) -> str:
        """Pretty JSON of the current root, for a clipboard hand-off."""
        return json.dumps(self.root.to_python(), indent=2, ensure_ascii=False)
