"""pytest plugin for response-lens.

Auto-discovered by pytest via the pytest11 entry point declared in
pyproject.toml.  When the package is installed (even in editable mode),
pytest discovers this plugin automatically; no conftest.py changes needed.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from response_lens import ViewerConfig, infer_schema
from response_lens.analysis.schema import canonical


@pytest.fixture(scope="session")
def assert_json_shape() -> Any:
    """Fixture that returns a callable JSON shape asserter.

    Two documents have the same shape when their inferred schemas are
    structurally identical: same keys, same value kinds, same array lengths
    and the same set of non-null ("required") keys.  Scalar values are
    ignored.

    Usage in tests::

        def test_payload_shape(assert_json_shape):
            assert_json_shape({"id": 7, "tags": ["a"]}, {"id": 1, "tags": ["z"]})

        def test_shape_break(assert_json_shape):
            with pytest.raises(AssertionError, match=r"shape mismatch"):
                assert_json_shape({"id": 7}, {"id": "7"})

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` when the shapes differ.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: ViewerConfig | None = None,
    ) -> None:
        """Assert that two JSON documents share one structural schema.

        Args:
            actual:   The JSON value produced by the code under test.
            expected: A reference document with the expected shape.
            config:   Optional ViewerConfig (e.g. to disable format hints so
                      ``"a@b.io"`` and ``"plain"`` compare equal).

        Raises:
            AssertionError: When the canonical schemas differ, with both
                schemas in the message.
        """
        actual_schema = infer_schema(actual, config=config)
        expected_schema = infer_schema(expected, config=config)
        if canonical(actual_schema) != canonical(expected_schema):
            raise AssertionError(
                "JSON shape mismatch\n"
                f"  actual schema:   {json.dumps(actual_schema.to_dict())}\n"
                f"  expected schema: {json.dumps(expected_schema.to_dict())}"
            )

    return _assert
