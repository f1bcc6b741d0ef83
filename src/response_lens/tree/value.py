"""Value: the tagged union every other component consumes, plus ingestion.

A Value is one of six kinds (see ``ValueKind``).  The payload held in
``data`` depends on the kind:

- NULL     -> None
- BOOLEAN  -> bool
- NUMBER   -> int | float   (finite; the Python type is kept for exact export)
- STRING   -> str
- ARRAY    -> list[Value]
- OBJECT   -> dict[str, Value]   (insertion order preserved)

``ingest`` turns raw JSON bytes/text or an already-decoded Python tree into
a Value.  Decoding is delegated to the standard ``json`` module; nothing is
evaluated and no coercion between kinds ever happens.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from response_lens.errors import (
    CyclicStructureError,
    ParseError,
    PayloadTooDeepError,
    PayloadTooLargeError,
)
from response_lens.tree.path import Segment

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_NESTING_DEPTH",
    "CycleGuard",
    "Value",
    "ValueBuilder",
    "ValueKind",
    "format_number",
    "ingest",
]


# Default ingestion nesting ceiling.  Recursive passes over a Value spend a
# few frames per level and must stay under the default recursion limit.
MAX_NESTING_DEPTH = 200


class ValueKind(StrEnum):
    """The six JSON value kinds."""

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


def format_number(number: int | float) -> str:
    """Shortest decimal form of a number; integral floats drop the ``.0``."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return repr(number) if isinstance(number, float) else str(number)


@dataclass(frozen=True, slots=True)
class Value:
    """A node of a JSON-like tree.

    Attributes:
        kind: Which variant this node is.
        data: The variant payload (see module docstring).
    """

    kind: ValueKind
    data: Any = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def null(cls) -> Value:
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls(ValueKind.BOOLEAN, flag)

    @classmethod
    def number(cls, number: int | float) -> Value:
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string(cls, text: str) -> Value:
        return cls(ValueKind.STRING, text)

    @classmethod
    def array(cls, items: list[Value]) -> Value:
        return cls(ValueKind.ARRAY, items)

    @classmethod
    def object(cls, members: dict[str, Value]) -> Value:
        return cls(ValueKind.OBJECT, members)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def is_container(self) -> bool:
        return self.kind in (ValueKind.ARRAY, ValueKind.OBJECT)

    @property
    def size(self) -> int:
        """Number of direct children (0 for primitives)."""
        return len(self.data) if self.is_container else 0

    def child(self, segment: Segment) -> Value | None:
        """Return the direct child addressed by ``segment``, or None."""
        match self.kind:
            case ValueKind.OBJECT:
                return self.data.get(segment) if isinstance(segment, str) else None
            case ValueKind.ARRAY:
                if isinstance(segment, int) and 0 <= segment < len(self.data):
                    return self.data[segment]
                return None
            case _:
                return None

    def children(self) -> Iterator[tuple[Segment, Value]]:
        """Yield ``(segment, child)`` pairs in document order."""
        match self.kind:
            case ValueKind.OBJECT:
                yield from self.data.items()
            case ValueKind.ARRAY:
                yield from enumerate(self.data)
            case _:
                return

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    @property
    def type_label(self) -> str:
        """``Array[n]`` / ``Object{n}`` for containers, the kind name otherwise."""
        match self.kind:
            case ValueKind.ARRAY:
                return f"Array[{len(self.data)}]"
            case ValueKind.OBJECT:
                return f"Object{{{len(self.data)}}}"
            case _:
                return str(self.kind)

    def display(self) -> str:
        """Short text form used by table cells, list cards and tree leaves."""
        match self.kind:
            case ValueKind.NULL:
                return "null"
            case ValueKind.BOOLEAN:
                return "true" if self.data else "false"
            case ValueKind.NUMBER:
                return format_number(self.data)
            case ValueKind.STRING:
                return self.data
            case _:
                return self.type_label

    def to_python(self) -> Any:
        """Convert back to plain ``dict``/``list``/scalar values.

        Raises:
            CyclicStructureError: If the tree contains a reference cycle.
        """
        return _to_python(self, CycleGuard())


class CycleGuard:
    """Tracks the containers on the current traversal branch.

    Entering a container that is already on the branch means the structure
    refers back to one of its own ancestors.  Shared (non-cyclic) references
    are allowed: a container leaves the branch once its subtree is done.
    """

    __slots__ = ("_active",)

    def __init__(self) -> None:
        self._active: set[int] = set()

    @contextmanager
    def enter(self, node: object) -> Iterator[None]:
        key = id(node)
        if key in self._active:
            msg = f"cyclic reference detected at {type(node).__name__} {key:#x}"
            raise CyclicStructureError(msg)
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)


def _to_python(value: Value, guard: CycleGuard) -> Any:
    match value.kind:
        case ValueKind.OBJECT:
            with guard.enter(value):
                return {k: _to_python(v, guard) for k, v in value.data.items()}
        case ValueKind.ARRAY:
            with guard.enter(value):
                return [_to_python(item, guard) for item in value.data]
        case _:
            return value.data


# ----------------------------------------------------------------------
# Ingestion
# ----------------------------------------------------------------------


def _reject_constant(name: str) -> Any:
    raise ParseError(f"non-finite number {name} is not valid JSON")


class ValueBuilder:
    """Converts a decoded Python tree into a Value tree.

    The dispatch order matters: ``bool`` MUST be checked before ``int``
    because ``isinstance(True, int)`` is True.

    Args:
        max_nodes: Ceiling on the number of nodes built; ``None`` disables it.
        max_depth: Ceiling on the depth of any node built (root = 0); ``None``
            disables it.
    """

    def __init__(
        self, max_nodes: int | None = None, max_depth: int | None = None
    ) -> None:
        self._max_nodes = max_nodes
        self._max_depth = max_depth
        self._count = 0
        self._depth = 0
        self._guard = CycleGuard()

    def build(self, raw: Any) -> Value:
        """Convert one decoded JSON value (and its subtree).

        Raises:
            ParseError: For unsupported types, non-string keys or NaN/Infinity.
            CyclicStructureError: If ``raw`` refers back to an ancestor.
            PayloadTooLargeError: If ``max_nodes`` is exceeded.
            PayloadTooDeepError: If ``max_depth`` is exceeded.
        """
        if isinstance(raw, Value):
            return self.build(raw.to_python())

        self._count += 1
        if self._max_nodes is not None and self._count > self._max_nodes:
            raise PayloadTooLargeError(self._max_nodes)
        if self._max_depth is not None and self._depth > self._max_depth:
            raise PayloadTooDeepError(self._max_depth)

        if raw is None:
            return Value(ValueKind.NULL)
        if isinstance(raw, bool):
            return Value(ValueKind.BOOLEAN, raw)
        if isinstance(raw, int):
            return Value(ValueKind.NUMBER, int(raw))
        if isinstance(raw, float):
            if not math.isfinite(raw):
                _reject_constant(repr(raw))
            return Value(ValueKind.NUMBER, raw)
        if isinstance(raw, str):
            return Value(ValueKind.STRING, raw)
        if isinstance(raw, dict):
            return self._build_object(raw)
        if isinstance(raw, (list, tuple)):
            return self._build_array(raw)

        raise ParseError(f"unsupported value type: {type(raw).__name__}")

    @contextmanager
    def _descend(self, container: object) -> Iterator[None]:
        with self._guard.enter(container):
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1

    def _build_object(self, obj: dict[Any, Any]) -> Value:
        with self._descend(obj):
            members: dict[str, Value] = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise ParseError(f"object key {key!r} is not a string")
                members[key] = self.build(item)
        return Value(ValueKind.OBJECT, members)

    def _build_array(self, arr: list[Any] | tuple[Any, ...]) -> Value:
        with self._descend(arr):
            items = [self.build(item) for item in arr]
        return Value(ValueKind.ARRAY, items)


def _decode(raw: bytes | bytearray | str) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            msg = f"payload is not valid UTF-8: {exc.reason}"
            raise ParseError(msg, exc.start) from exc
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, exc.pos, exc.lineno, exc.colno) from exc


def ingest(
    raw: Any,
    max_nodes: int | None = None,
    max_depth: int | None = MAX_NESTING_DEPTH,
) -> Value:
    """Build a Value from raw JSON bytes/text or a pre-parsed Python tree.

    Args:
        raw:       ``bytes``/``bytearray`` (UTF-8, BOM tolerated) or ``str`` are
                   parsed as JSON text; anything else is treated as an already
                   decoded tree of dicts, lists and scalars.
        max_nodes: Optional ceiling on the number of nodes.
        max_depth: Ceiling on nesting depth; ``None`` disables it.

    Returns:
        The Value tree.

    Raises:
        ParseError: Malformed text or an unsupported Python value.
        PayloadTooLargeError: The node ceiling was exceeded.
        PayloadTooDeepError: The nesting ceiling was exceeded.
        CyclicStructureError: A pre-parsed tree refers back to an ancestor.
    """
    try:
        decoded = _decode(raw) if isinstance(raw, (bytes, bytearray, str)) else raw
        value = ValueBuilder(max_nodes=max_nodes, max_depth=max_depth).build(decoded)
    except RecursionError as exc:
        raise ParseError("payload is nested too deeply") from exc
    logger.debug("ingested %s", value.type_label)
    return value
