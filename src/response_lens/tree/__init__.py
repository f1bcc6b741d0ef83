"""Tree subpackage: the Value tagged union, ingestion and Path addressing.

Re-exports the public API for the tree module:
- Value: dataclass holding one node of a JSON-like tree
- ValueKind: StrEnum of the six kinds (NULL, BOOLEAN, NUMBER, STRING, ARRAY, OBJECT)
- ingest: raw JSON bytes/text or a decoded Python tree -> Value
- Path: typed key/index address with canonical ``a.b[0].c`` text form
"""

from response_lens.tree.path import Path, Segment
from response_lens.tree.value import (
    MAX_NESTING_DEPTH,
    CycleGuard,
    Value,
    ValueBuilder,
    ValueKind,
    ingest,
)

__all__ = [
    "MAX_NESTING_DEPTH",
    "CycleGuard",
    "Path",
    "Segment",
    "Value",
    "ValueBuilder",
    "ValueKind",
    "ingest",
]
