"""Integrations subpackage for response-lens.

Contains the pytest plugin (auto-discovered via the pytest11 entry point),
which provides the ``assert_json_shape`` fixture.
"""

from __future__ import annotations

__all__: list[str] = []
