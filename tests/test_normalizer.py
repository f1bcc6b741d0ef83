"""Tests for KeyNormalizer."""

from __future__ import annotations

import pytest

from response_lens.normalizer import KeyNormalizer


@pytest.fixture
def normalizer() -> KeyNormalizer:
    return KeyNormalizer()


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("maxTableRows", "max_table_rows"),
        ("MaxTableRows", "max_table_rows"),
        ("max-table-rows", "max_table_rows"),
        ("max_table_rows", "max_table_rows"),
        ("max.table rows", "max_table_rows"),
        ("XMLRootName", "xml_root_name"),
        ("level2Depth", "level_2_depth"),
        ("", ""),
    ],
)
def test_normalize(normalizer: KeyNormalizer, key: str, expected: str) -> None:
    assert normalizer.normalize(key) == expected


def test_custom_separator(normalizer: KeyNormalizer) -> None:
    assert normalizer.normalize("enableTypeDetection", sep="-") == (
        "enable-type-detection"
    )


def test_words(normalizer: KeyNormalizer) -> None:
    assert normalizer.words("parseHTTPResponse") == ["parse", "http", "response"]
