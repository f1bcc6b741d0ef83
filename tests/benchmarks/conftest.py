"""Deterministic payload generators for performance benchmarks.

All generators produce fixed, reproducible payloads. No random values.
Three tiers: a 100-record page, a 5,000-record listing and a deeply nested
configuration document.
"""

from __future__ import annotations

from typing import Any

import pytest


def generate_records(count: int) -> list[dict[str, Any]]:
    """API-style listing: flat records with ids, emails, urls and dates."""
    return [
        {
            "id": i,
            "uuid": f"00000000-0000-4000-8000-{i:012d}",
            "name": f"user_{i}",
            "email": f"user_{i}@example.com",
            "profile": f"https://example.com/users/{i}",
            "created_at": f"2024-01-{i % 28 + 1:02d}T00:00:00Z",
            "status": ("active", "disabled", None)[i % 3],
            "tags": [f"tag_{i % 7}", f"tag_{i % 11}"],
        }
        for i in range(count)
    ]


def generate_nested(depth: int, fanout: int) -> dict[str, Any]:
    """Balanced object tree ``depth`` levels deep with ``fanout`` keys per level."""
    if depth == 0:
        return {f"leaf_{i}": i for i in range(fanout)}
    return {
        f"level_{depth}_{i}": generate_nested(depth - 1, fanout) for i in range(fanout)
    }


# --- Fixtures for each size tier ---


@pytest.fixture
def records_100() -> list[dict[str, Any]]:
    """One page of 100 records."""
    return generate_records(100)


@pytest.fixture
def records_5000() -> list[dict[str, Any]]:
    """A 5,000-record listing (exceeds the default table row cap)."""
    return generate_records(5000)


@pytest.fixture
def nested_doc() -> dict[str, Any]:
    """7 object levels x 4 keys: ~22,000 nodes."""
    return generate_nested(6, 4)
