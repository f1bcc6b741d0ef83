"""NavigationState: all mutable viewing state of one displayed response.

The state holds a pointer to the currently displayed root, a history stack
of prior roots for back-navigation, tree expansion, selection and the
search query.  Navigation never touches the Values themselves: drilling in
only swaps which sub-value ``root`` points at.

Expansion is tracked with two sets.  ``expanded`` holds paths explicitly
opened; ``collapsed`` holds paths explicitly closed.  A path in neither set
falls back to the auto-expand rule (``depth < auto_expand_depth``), so a
shallow node can still be toggled shut.

Paths in ``expanded``, ``collapsed`` and ``selected_path`` are relative to
the current root.  They are cleared whenever the root changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from response_lens.errors import PathNotFoundError
from response_lens.tree.path import Path
from response_lens.tree.value import Value

logger = logging.getLogger(__name__)

__all__ = ["NavigationState"]


@dataclass(slots=True)
class NavigationState:
    """Drill-down, expansion and selection state over one response.

    Attributes:
        root: The Value currently displayed.
        history: Roots displayed before each drill-down (top = most recent).
        expanded: Tree paths explicitly expanded.
        collapsed: Tree paths explicitly collapsed.
        selected_path: The selected node, if any.
        search_query: The active search text ("" = no search).
        location: Absolute path of ``root`` inside the original response.
        trail: Locations matching ``history`` entry for entry.
        auto_expand_depth: Nodes shallower than this start expanded.
    """

    root: Value
    history: list[Value] = field(default_factory=list)
    expanded: set[Path] = field(default_factory=set)
    collapsed: set[Path] = field(default_factory=set)
    selected_path: Path | None = None
    search_query: str = ""
    location: Path = field(default_factory=Path)
    trail: list[Path] = field(default_factory=list)
    auto_expand_depth: int = 2

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, root: Value) -> None:
        """Display a new response: replace the root and forget everything else."""
        self.root = root
        self.history.clear()
        self.trail.clear()
        self.location = Path()
        self.search_query = ""
        self._clear_view_state()

    def _clear_view_state(self) -> None:
        self.expanded.clear()
        self.collapsed.clear()
        self.selected_path = None

    # ------------------------------------------------------------------
    # Drill-down
    # ------------------------------------------------------------------

    @property
    def can_go_back(self) -> bool:
        return bool(self.history)

    def drill_into(self, path: Path) -> Value:
        """Make the sub-value at ``path`` (relative to root) the new root.

        Returns:
            The new root.

        Raises:
            PathNotFoundError: If ``path`` does not resolve; state is unchanged.
        """
        target = path.resolve(self.root)
        self.history.append(self.root)
        self.trail.append(self.location)
        self.root = target
        self.location = self.location.join(path)
        self._clear_view_state()
        logger.debug("drilled into %s", self.location)
        return target

    def back(self) -> bool:
        """Restore the root displayed before the last drill-down.

        Returns:
            False when there is no history (nothing changes), True otherwise.
        """
        if not self.history:
            logger.info("back requested with empty navigation history")
            return False
        self.root = self.history.pop()
        self.location = self.trail.pop()
        self._clear_view_state()
        return True

    # ------------------------------------------------------------------
    # Tree expansion and selection
    # ------------------------------------------------------------------

    def is_expanded(self, path: Path) -> bool:
        if path in self.expanded:
            return True
        if path in self.collapsed:
            return False
        return path.depth < self.auto_expand_depth

    def toggle(self, path: Path) -> bool:
        """Flip the expansion of ``path``; returns the new state."""
        if self.is_expanded(path):
            self.expanded.discard(path)
            self.collapsed.add(path)
            return False
        self.collapsed.discard(path)
        self.expanded.add(path)
        return True

    def expand_all(self) -> None:
        """Expand every container under the current root."""
        self.collapsed.clear()
        self._add_container_paths(self.root, Path())

    def collapse_all(self) -> None:
        """Collapse every container, including the auto-expanded ones."""
        self.expanded.clear()
        self._add_container_paths(self.root, Path(), into=self.collapsed)

    def _add_container_paths(
        self, node: Value, path: Path, into: set[Path] | None = None
    ) -> None:
        target = self.expanded if into is None else into
        target.add(path)
        for segment, child in node.children():
            if child.is_container:
                self._add_container_paths(child, path.child(segment), into)

    def select(self, path: Path | None) -> None:
        """Select a node (or clear the selection with None).

        Raises:
            PathNotFoundError: If ``path`` does not resolve against root.
        """
        if path is not None:
            path.resolve(self.root)
        self.selected_path = path

    @property
    def selected(self) -> Value | None:
        if self.selected_path is None:
            return None
        try:
            return self.selected_path.resolve(self.root)
        except PathNotFoundError:
            return None
